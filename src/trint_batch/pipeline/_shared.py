"""Shared types for the upload pipeline."""

import hashlib
from dataclasses import dataclass, field
from typing import Any


def generate_upload_id(file_path: str) -> str:
    """Short display ID for a file path: the first 6 hex chars of its SHA-1.

    Only used to correlate log lines; different paths may collide.
    """
    return hashlib.sha1(file_path.encode("utf-8", "surrogateescape")).hexdigest()[:6]


def printable(text: str) -> str:
    """Replace characters UTF-8 cannot encode, such as undecodable filename bytes, with ?."""
    return text.encode("utf-8", "replace").decode("utf-8")


@dataclass(frozen=True)
class ResolvedFile:
    """A file scheduled for upload, with its display ID."""

    path: str
    upload_id: str

    @classmethod
    def from_path(cls, path: str) -> "ResolvedFile":
        return cls(path=path, upload_id=generate_upload_id(path))

    @property
    def display_path(self) -> str:
        return printable(self.path)


@dataclass
class BatchSummary:
    """Results from a batch upload run."""

    total_candidates: int = 0
    total_supported: int = 0
    succeeded: int = 0
    failed: int = 0
    dry_run: bool = False
    planned: list[ResolvedFile] = field(default_factory=list)
    failures: list[dict[str, Any]] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return self.succeeded + self.failed
