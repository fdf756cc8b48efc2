"""Trint upload server client and operations."""

from trint_batch.trint.client import DEFAULT_UPLOAD_SERVER, get_session
from trint_batch.trint.upload import file_upload

__all__ = ["DEFAULT_UPLOAD_SERVER", "file_upload", "get_session"]
