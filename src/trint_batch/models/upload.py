"""Result types returned by the upload transport."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one upload request that reached the server."""

    success: bool
    trint_id: str | None = None
    message: str | None = None
    status_code: int | None = None
