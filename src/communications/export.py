import csv
import io
from collections.abc import Iterable

from src.communications.dtos import CommunicationDTO

COMMUNICATION_EXPORT_HEADER = ["Date", "Guest", "Type", "Direction", "Subject", "Content", "Status"]

CONTENT_PREVIEW_LENGTH = 100


def content_preview(content: str) -> str:
    if len(content) > CONTENT_PREVIEW_LENGTH:
        return content[:CONTENT_PREVIEW_LENGTH] + "..."
    return content


def export_communications_csv(communications: Iterable[CommunicationDTO]) -> str:
    """Header row unquoted, every data cell quoted."""
    buffer = io.StringIO()
    buffer.write(",".join(COMMUNICATION_EXPORT_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for c in communications:
        writer.writerow(
            [
                c.created_at.date().isoformat() if c.created_at else "",
                c.guest_name,
                c.communication_type.value,
                c.direction.value,
                c.subject or "",
                content_preview(c.content),
                c.status.value,
            ]
        )
    return buffer.getvalue()
