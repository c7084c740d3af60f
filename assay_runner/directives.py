# assay_runner/directives.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, Field

from assay.errors import UsageError


class IncludeIn(BaseModel):
    source: Path = Field(..., description="File or directory to stage; relative to the launch directory")
    destination: Optional[Path] = Field(None, description="Relative path inside the test directory")


def parse_includes(items: Iterable[Any]) -> List[IncludeIn]:
    """
    Accepts "path", ("source", "destination"), {"source": ..., "destination": ...}
    or IncludeIn instances.
    """
    out: List[IncludeIn] = []
    for item in items:
        if isinstance(item, IncludeIn):
            out.append(item)
        elif isinstance(item, dict):
            out.append(IncludeIn(**item))
        elif isinstance(item, (tuple, list)):
            if not 1 <= len(item) <= 2:
                raise UsageError("An include directive is (source) or (source, destination), got", item)
            source, *rest = item
            out.append(IncludeIn(source=source, destination=rest[0] if rest else None))
        else:
            out.append(IncludeIn(source=item))
    return out


def stage(private_fs, includes: Iterable[IncludeIn]) -> None:
    for inc in includes:
        private_fs.include(inc.source, inc.destination)
