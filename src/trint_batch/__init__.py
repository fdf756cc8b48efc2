"""Batch upload of media files to the Trint transcription service."""

__version__ = "1.0.0"
