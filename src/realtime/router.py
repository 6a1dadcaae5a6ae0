import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from src.config.table_names import TableNames
from src.realtime.change_feed import ChangeEvent, ChangeFeed, get_change_feed
from src.realtime.urls import REALTIME_URL

logger = logging.getLogger(__name__)

router = APIRouter()

KNOWN_RESOURCES = {table.value for table in TableNames}


@router.websocket(REALTIME_URL)
async def resource_changes(
    websocket: WebSocket,
    resource: str,
    feed: ChangeFeed = Depends(get_change_feed),
) -> None:
    """
    Push a message to the client whenever the resource changes.
    Messages only say that something changed; clients re-fetch the resource.
    """
    if resource not in KNOWN_RESOURCES:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
    subscription = feed.subscribe(resource, queue.put_nowait)
    receive = asyncio.ensure_future(websocket.receive())
    next_event = asyncio.ensure_future(queue.get())
    try:
        while True:
            done, _ = await asyncio.wait(
                {receive, next_event}, return_when=asyncio.FIRST_COMPLETED
            )
            if receive in done:
                message = receive.result()
                if message["type"] == "websocket.disconnect":
                    break
                # clients have nothing to say; incoming frames are ignored
                receive = asyncio.ensure_future(websocket.receive())
            if next_event in done:
                event = next_event.result()
                await websocket.send_json(
                    {
                        "resource": event.resource,
                        "action": event.action.value,
                        "occurred_at": event.occurred_at.isoformat(),
                    }
                )
                next_event = asyncio.ensure_future(queue.get())
    except WebSocketDisconnect:
        logger.debug("Realtime client for %s went away mid-send", resource)
    finally:
        receive.cancel()
        next_event.cancel()
        subscription.unsubscribe()
    logger.info("Realtime client for %s disconnected", resource)
