# src/pu_pipeline/progress_log.py
"""
Progress-log sinks
==================

A progress log is anything with ``write(line)``. Two flavours are used:

- ``LoggingProgressLog`` – forwards every line to a ``logging.Logger``
- ``OutputCapture``      – forwards to another sink *and* keeps the text

Only the provisioning step is wrapped in ``OutputCapture``; its text is
scraped for the permalink once the process has exited.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol


class ProgressLog(Protocol):
    def write(self, line: str) -> None: ...


class LoggingProgressLog:
    """Sink that writes each line to a logger at a fixed level."""

    def __init__(self, name: str = "pu_pipeline.progress", level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.level = level

    def write(self, line: str) -> None:
        self.logger.log(self.level, "%s", line.rstrip("\n"))


class OutputCapture:
    """
    Forward every line unchanged to ``forward_to`` and accumulate it.

    ``drain()`` returns the full captured text and resets the buffer.
    """

    def __init__(self, forward_to: Optional[ProgressLog] = None) -> None:
        self.forward_to = forward_to
        self._chunks: List[str] = []

    def write(self, line: str) -> None:
        if self.forward_to is not None:
            self.forward_to.write(line)
        self._chunks.append(line if line.endswith("\n") else line + "\n")

    def drain(self) -> str:
        text = "".join(self._chunks)
        self._chunks = []
        return text
