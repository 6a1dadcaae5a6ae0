import contextlib
import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from src.resources.dtos import RecordNotFoundError, RemoteCallError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def report_failure(message: str):
    """Turn a failed store call into a short user-facing error.

    Nothing is retried; the caller keeps whatever state it had before the call.
    """
    try:
        yield
    except RecordNotFoundError as e:
        logger.warning("%s: %s", message, e)
        raise HTTPException(status_code=404, detail=f"{message}: {e}") from e
    except (SQLAlchemyError, RemoteCallError, OSError) as e:
        logger.exception(message)
        raise HTTPException(status_code=503, detail=message) from e
