"""Media type detection for uploadable files."""

from trint_batch.media.mimetype import (
    SUPPORTED_MIMETYPES,
    filter_supported_files,
    get_mime_type,
    get_supported_extensions,
    is_supported_media_type,
)

__all__ = [
    "SUPPORTED_MIMETYPES",
    "filter_supported_files",
    "get_mime_type",
    "get_supported_extensions",
    "is_supported_media_type",
]
