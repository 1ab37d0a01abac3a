# src/pu_pipeline/progress.py
"""
Phase classification for progress display.

The host feeds each log line to ``classify``; a match changes the
displayed phase, anything else leaves it alone. Nothing in the pipeline
itself depends on this.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence


@dataclass(frozen=True)
class ProgressTest:
    test: Pattern[str]
    phase: str


PULUMI_PROGRESS_TESTS: Sequence[ProgressTest] = (
    ProgressTest(re.compile(r"Invoking goal hook: pre", re.IGNORECASE), "pre-hook"),
    ProgressTest(re.compile(r"Invoking goal hook: post", re.IGNORECASE), "post-hook"),
)


def classify(line: str, tests: Sequence[ProgressTest] = PULUMI_PROGRESS_TESTS) -> Optional[str]:
    for t in tests:
        if t.test.search(line):
            return t.phase
    return None
