"""Supported media types for Trint transcription."""

import logging
import os
from types import MappingProxyType

logger = logging.getLogger(__name__)

SUPPORTED_MIMETYPES = MappingProxyType(
    {
        # Audio
        ".mp3": "audio/mpeg",
        ".wav": "audio/wav",
        ".m4a": "audio/mp4",
        ".aac": "audio/aac",
        ".ogg": "audio/ogg",
        ".flac": "audio/flac",
        ".wma": "audio/x-ms-wma",
        ".aiff": "audio/aiff",
        ".opus": "audio/opus",
        # Video
        ".mp4": "video/mp4",
        ".mov": "video/quicktime",
        ".avi": "video/x-msvideo",
        ".wmv": "video/x-ms-wmv",
        ".flv": "video/x-flv",
        ".mkv": "video/x-matroska",
        ".webm": "video/webm",
        ".mpeg": "video/mpeg",
        ".mpg": "video/mpeg",
        ".3gp": "video/3gpp",
        ".m4v": "video/x-m4v",
    }
)


def _extension(file_path: str) -> str:
    return os.path.splitext(os.path.basename(file_path))[1].lower()


def get_mime_type(file_path: str) -> str | None:
    """Return the MIME type for a file based on its extension, or None if unsupported."""
    return SUPPORTED_MIMETYPES.get(_extension(file_path))


def is_supported_media_type(file_path: str) -> bool:
    """Check if a file is a supported media type."""
    return get_mime_type(file_path) is not None


def filter_supported_files(files: list[str], debug: bool = False) -> list[str]:
    """
    Filter a list of files to only include supported media types.

    Args:
        files: File paths, in the order they should be uploaded
        debug: Log the excluded files and the remaining count

    Returns:
        Supported files, in input order
    """
    supported_files = []
    unsupported_files = []

    for file in files:
        if is_supported_media_type(file):
            supported_files.append(file)
        else:
            unsupported_files.append(file)

    if debug:
        if unsupported_files:
            logger.debug("Filtered out %d unsupported file(s):", len(unsupported_files))
            for file in unsupported_files:
                logger.debug("  - %s (extension: %s)", file, _extension(file) or "none")
        logger.debug("%d supported file(s) remain after filtering", len(supported_files))

    return supported_files


def get_supported_extensions() -> list[str]:
    """Get the supported file extensions (with dots)."""
    return list(SUPPORTED_MIMETYPES)
