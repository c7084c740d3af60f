# assay/services/working_directory.py
from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

DEFAULT_PREFIX = "private"


@dataclass
class TemporaryDirectoryHandle:
    """
    Owns a uniquely named directory under the system temp area.

    The whole tree is removed by cleanup(), or by the finalizer of the
    underlying TemporaryDirectory once the handle is collected.
    """
    prefix: str = DEFAULT_PREFIX
    _tmp: tempfile.TemporaryDirectory = field(init=False, repr=False)
    _path: Path = field(init=False)

    owned = True

    def __post_init__(self):
        self._tmp = tempfile.TemporaryDirectory(prefix=self.prefix)
        # getcwd() reports the resolved path (e.g. /private/var on macOS)
        self._path = Path(self._tmp.name).resolve()

    def path(self) -> Path:
        return self._path

    def cleanup(self) -> None:
        self._tmp.cleanup()


@dataclass(frozen=True)
class RootedDirectoryHandle:
    """
    A caller-chosen directory. Never deleted; contents persist between runs.
    """
    root: Path

    owned = False

    def path(self) -> Path:
        return self.root

    def cleanup(self) -> None:
        pass


WorkingDirectoryHandle = Union[TemporaryDirectoryHandle, RootedDirectoryHandle]
