# src/pu_pipeline/tree.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

log = logging.getLogger(__name__)


class WorkingTree:
    """
    Checked-out source tree backed by a local directory.

    Paths handed to ``has_file`` / ``add_file`` / ``read_file`` are relative
    to ``base_dir`` and use forward slashes, e.g. ``".pulumi/Pulumi.yaml"``.
    """

    def __init__(self, base_dir: Union[str, Path], name: Optional[str] = None) -> None:
        self.base_dir = Path(base_dir).resolve()
        self.name = name or self.base_dir.name

    def path(self, rel: str) -> Path:
        return self.base_dir / rel

    def has_file(self, rel: str) -> bool:
        return self.path(rel).is_file()

    def add_file(self, rel: str, contents: str) -> "WorkingTree":
        target = self.path(rel)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(contents)
        log.debug("Wrote %s (%d bytes)", target, len(contents))
        return self

    def read_file(self, rel: str) -> str:
        return self.path(rel).read_text()

    def __repr__(self) -> str:
        return f"WorkingTree({str(self.base_dir)!r}, name={self.name!r})"
