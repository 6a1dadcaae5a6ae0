from uuid import UUID


class RecordNotFoundError(Exception):
    """Raised when a record no longer exists in the store."""

    def __init__(self, resource: str, record_id: UUID | str) -> None:
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} '{record_id}' not found")


class RemoteCallError(Exception):
    """Raised when a call to the store or another remote collaborator fails."""
