# assay/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional


class AssayError(Exception):
    """
    Environment failures while preparing a private filesystem.
    Usage mistakes are deliberately not part of this hierarchy.
    """


class SetupError(AssayError):
    def __init__(self, step: str, path: Optional[Path] = None):
        self.step = step
        self.path = path
        msg = f"Failed to {step}" if path is None else f"Failed to {step}: {path}"
        super().__init__(msg)


class StagingError(AssayError):
    def __init__(self, message: str, source: Path, destination: Path):
        self.source = source
        self.destination = destination
        super().__init__(f"{message} ({source} -> {destination})")


class UsageError(ValueError):
    """Raised for a malformed include directive; retrying cannot fix it."""

    def __init__(self, message: str, path):
        self.path = path
        super().__init__(f"{message} {str(path)!r}")
