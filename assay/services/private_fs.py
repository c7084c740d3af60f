# assay/services/private_fs.py
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union

from assay.errors import SetupError, StagingError, UsageError
from assay.logging import log_include
from assay.services.working_directory import (
    DEFAULT_PREFIX,
    RootedDirectoryHandle,
    TemporaryDirectoryHandle,
    WorkingDirectoryHandle,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _current_dir() -> Path:
    try:
        return Path(os.getcwd())
    except OSError as exc:
        raise SetupError("read the current working directory") from exc


def _enter(directory: Path) -> None:
    try:
        os.chdir(directory)
    except OSError as exc:
        raise SetupError("set the test working directory", directory) from exc


def _is_inside(root: Path, candidate: Path) -> bool:
    resolved = candidate.resolve()
    return resolved == root or root in resolved.parents


class PrivateFS:
    """
    Private working directory for a single test execution.

    Constructing one switches the *process* working directory into the
    sandbox, so at most one instance may be live per process. Relative
    include sources resolve against ``ran_from``, the directory the process
    was in before the switch.
    """

    def __init__(
        self,
        ran_from: Path,
        directory: WorkingDirectoryHandle,
        *,
        warn_on_overwrite: bool = True,
    ):
        self.ran_from = ran_from
        self.directory = directory
        self.warn_on_overwrite = warn_on_overwrite
        self._closed = False

    # ---------- Construction ----------

    @classmethod
    def temporary(cls, prefix: str = DEFAULT_PREFIX, *, warn_on_overwrite: bool = True) -> PrivateFS:
        ran_from = _current_dir()
        try:
            directory = TemporaryDirectoryHandle(prefix)
        except OSError as exc:
            raise SetupError("create a temporary test directory") from exc
        try:
            _enter(directory.path())
        except SetupError:
            directory.cleanup()
            raise
        logger.debug("private_fs temporary %s (ran_from=%s)", directory.path(), ran_from)
        return cls(ran_from, directory, warn_on_overwrite=warn_on_overwrite)

    @classmethod
    def rooted(cls, root: PathLike, *, warn_on_overwrite: bool = True) -> PrivateFS:
        ran_from = _current_dir()
        root = Path(root).expanduser()
        if not root.is_absolute():
            root = ran_from / root
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SetupError("create the root directory", root) from exc
        directory = RootedDirectoryHandle(root.resolve())
        _enter(directory.path())
        logger.debug("private_fs rooted %s (ran_from=%s)", directory.path(), ran_from)
        return cls(ran_from, directory, warn_on_overwrite=warn_on_overwrite)

    @property
    def path(self) -> Path:
        return self.directory.path()

    # ---------- Staging ----------

    def include(self, source_path: PathLike, destination_path: Optional[PathLike] = None) -> Path:
        """
        Copy a file or the contents of a directory into the sandbox.

        Files land at ``<root>/<basename>`` unless a relative destination is
        given. Directories are merged into the root (or the destination),
        never nested under their own name. Existing files are overwritten.
        Returns the path that received the copy.
        """
        source = Path(source_path)
        if not source.is_absolute():
            source = self.ran_from / source
        destination = None if destination_path is None else Path(destination_path)

        if source.is_file():
            kind = "file"
            target = self._target(destination, default=self.path / source.name)
        elif source.is_dir():
            kind = "directory"
            target = self._target(destination, default=self.path)
            if _is_inside(source.resolve(), target):
                raise UsageError("Cannot include a directory into itself:", source)
        else:
            raise UsageError("The include source must be a file or a directory, this is neither:", source)

        if destination is not None:
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StagingError("Failed to create the parent directory", source, target) from exc

        try:
            if kind == "file":
                self._copy_file(source, target)
            else:
                shutil.copytree(source, target, copy_function=self._copy_file, dirs_exist_ok=True)
        except OSError as exc:
            raise StagingError(f"Failed to copy the {kind} into the test directory", source, target) from exc

        log_include(logger, kind, source, target)
        return target

    def _target(self, destination: Optional[Path], default: Path) -> Path:
        if destination is None:
            return default
        if destination.is_absolute() or destination.anchor:
            raise UsageError("The include destination must be a relative path:", destination)
        target = self.path / destination
        if not _is_inside(self.path, target):
            raise UsageError("The include destination escapes the test directory:", destination)
        return target

    def _copy_file(self, src, dst):
        if self.warn_on_overwrite and os.path.isfile(dst):
            logger.warning("include overwrites %s", dst)
        shutil.copyfile(src, dst)
        shutil.copymode(src, dst)
        return dst

    # ---------- Lifetime ----------

    def close(self) -> None:
        """
        Return to ``ran_from`` and release the directory. Temporary trees are
        deleted, rooted ones are left as they are.
        """
        if self._closed:
            return
        self._closed = True
        try:
            os.chdir(self.ran_from)
        except OSError:
            logger.warning("could not return to %s, staying in %s", self.ran_from, self.path)
        self.directory.cleanup()

    def __enter__(self) -> PrivateFS:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
