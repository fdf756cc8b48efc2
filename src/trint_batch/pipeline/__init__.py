"""Pipeline for resolving, filtering, and uploading media files."""

from ._shared import BatchSummary, ResolvedFile, generate_upload_id
from .upload import collect_files, run_upload, upload_files

__all__ = [
    "BatchSummary",
    "ResolvedFile",
    "collect_files",
    "generate_upload_id",
    "run_upload",
    "upload_files",
]
