"""Data models shared across the upload tool."""

from trint_batch.models.upload import UploadOutcome

__all__ = ["UploadOutcome"]
