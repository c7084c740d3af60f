# assay_runner/decorator.py
from __future__ import annotations

import asyncio
import functools
import inspect
import os
from typing import Any, Callable, Dict, Iterable, Optional

from assay.config import Settings
from assay.di import build_private_fs
from assay_runner.directives import parse_includes, stage


def _restore_env(saved: Dict[str, Optional[str]]) -> None:
    for key, value in saved.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


def assay(
    func: Optional[Callable] = None,
    *,
    include: Iterable[Any] = (),
    root_directory=None,
    env: Optional[Dict[str, str]] = None,
    setup: Optional[Callable[[], Any]] = None,
    teardown: Optional[Callable[[], Any]] = None,
    settings: Optional[Settings] = None,
):
    """
    Run a test function inside its own private filesystem.

    Per call: build the sandbox, stage ``include`` directives in order, set
    ``env``, run ``setup``, the body and ``teardown`` (always), then restore
    the environment and close the sandbox. ``async def`` bodies are driven
    with asyncio.run. A ``private_fs`` parameter receives the sandbox.

    The process working directory is shared, so decorated tests must not run
    concurrently in one process; use one process per worker (pytest-xdist).
    """
    includes = parse_includes(include)
    env = dict(env or {})

    def decorate(fn: Callable) -> Callable:
        sig = inspect.signature(fn)
        wants_fs = "private_fs" in sig.parameters

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            private_fs = build_private_fs(settings, root_directory)
            saved_env = {key: os.environ.get(key) for key in env}
            try:
                stage(private_fs, includes)
                os.environ.update(env)
                if setup is not None:
                    setup()
                try:
                    if wants_fs:
                        kwargs["private_fs"] = private_fs
                    result = fn(*args, **kwargs)
                    if inspect.isawaitable(result):
                        result = asyncio.run(result)
                    return result
                finally:
                    if teardown is not None:
                        teardown()
            finally:
                _restore_env(saved_env)
                private_fs.close()

        # hide private_fs from pytest's fixture resolution
        wrapper.__signature__ = sig.replace(
            parameters=[p for p in sig.parameters.values() if p.name != "private_fs"]
        )
        return wrapper

    if func is not None:
        return decorate(func)
    return decorate
