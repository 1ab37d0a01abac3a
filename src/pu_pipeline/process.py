# src/pu_pipeline/process.py
"""
ProcessStep
===========

Runs one external command as an asyncio subprocess, streaming its merged
stdout/stderr line by line into a progress log, and classifies the exit
code into a ``ProcessOutcome``.

The child environment is ``merge_env(ambient, overlay)``: the ambient
environment is copied, never mutated, and the overlay wins on conflicts.

Limitations
-----------
* No timeout: a hung command blocks the awaiting task until it exits.
  Callers needing bounded latency must wrap ``run`` themselves
  (e.g. ``asyncio.wait_for``).
* No cancellation guarantee: if the awaiting task is cancelled the child
  process is *not* terminated here. Supervise externally if you need that.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import deque
from pathlib import Path
from typing import AsyncIterator, Deque, Dict, List, Mapping, Optional, Union

from pu_pipeline.progress_log import ProgressLog
from pu_pipeline.types import ProcessOutcome

log = logging.getLogger(__name__)

# exit code reported when the executable cannot be found (shell convention)
COMMAND_NOT_FOUND = 127

# reported when the working directory is missing
BAD_WORKING_DIR = 1

# longest line kept; provisioning tools print long single-line diffs
STREAM_LIMIT = 1 << 20
CHUNK_SIZE = 1 << 16


def merge_env(ambient: Mapping[str, str], overlay: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Return a new mapping: ``ambient`` overlaid with ``overlay``."""
    env = dict(ambient)
    if overlay:
        env.update(overlay)
    return env


async def read_lines(stream: asyncio.StreamReader, limit: int = STREAM_LIMIT) -> AsyncIterator[bytes]:
    """
    Yield newline-separated lines from *stream* without the newline.

    A line longer than *limit* bytes is cut at *limit*; the rest of it, up to
    the next newline, is dropped.
    """
    pending = b""
    dropping = False
    while True:
        chunk = await stream.read(CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split(b"\n")
        for raw in lines:
            if dropping:
                dropping = False
                continue
            yield raw[:limit]
        if len(pending) > limit:
            if not dropping:
                yield pending[:limit]
                dropping = True
            pending = b""
    if pending and not dropping:
        yield pending[:limit]


class ProcessStep:
    """
    Spawn ``command args…`` in ``cwd`` and wait for it.

    Parameters
    ----------
    tail_lines : int
        How many trailing output lines to keep on the outcome for diagnostics.
    line_limit : int
        Longest output line passed on; longer lines are truncated.
    ambient_env : mapping, optional
        Environment snapshot to overlay onto. Defaults to ``os.environ`` at
        call time.
    """

    def __init__(
        self,
        tail_lines: int = 40,
        ambient_env: Optional[Mapping[str, str]] = None,
        line_limit: int = STREAM_LIMIT,
    ) -> None:
        self.tail_lines = int(tail_lines)
        self.line_limit = int(line_limit)
        self.ambient_env = ambient_env

    async def run(
        self,
        command: str,
        args: List[str],
        cwd: Union[str, Path],
        env_overlay: Optional[Mapping[str, str]],
        log_sink: ProgressLog,
    ) -> ProcessOutcome:
        argv = [command, *args]
        cmdline = " ".join(argv)
        ambient = self.ambient_env if self.ambient_env is not None else os.environ
        env = merge_env(ambient, env_overlay)
        tail: Deque[str] = deque(maxlen=max(1, self.tail_lines))

        if not Path(cwd).is_dir():
            msg = f"Working directory does not exist: {cwd}"
            log_sink.write(msg)
            return ProcessOutcome(BAD_WORKING_DIR, msg, f"'{cmdline}' could not be started: {msg}")

        log.debug("Spawning %s (cwd=%s)", cmdline, cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                cwd=str(cwd),
                env=env,
            )
        except FileNotFoundError as exc:
            msg = f"Command not found: {command} ({exc})"
            log_sink.write(msg)
            return ProcessOutcome(COMMAND_NOT_FOUND, msg, f"'{cmdline}' could not be started: {msg}")

        assert proc.stdout is not None
        try:
            async for raw in read_lines(proc.stdout, self.line_limit):
                line = raw.decode("utf-8", errors="replace").rstrip("\r")
                tail.append(line)
                log_sink.write(line)
        finally:
            code = await proc.wait()

        captured = "\n".join(tail)
        if code == 0:
            return ProcessOutcome(0, captured, f"'{cmdline}' completed")

        log.warning("%s exited with code %d", cmdline, code)
        return ProcessOutcome(code, captured, f"'{cmdline}' failed with exit code {code}")
