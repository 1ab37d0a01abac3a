# src/pu_pipeline/stages/transform.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from pu_pipeline.errors import TransformFailed
from pu_pipeline.pipeline import Stage
from pu_pipeline.types import RunState, TransformSpec

log = logging.getLogger(__name__)


class CodeTransform(Stage):
    """
    Apply tree mutations in list order.

    An entry whose predicate returns False is skipped; later entries still
    run. A mutation or predicate that raises aborts the stage (and the
    pipeline) and leaves the tree as the earlier mutations left it: there is
    no rollback. A mutation may return a replacement tree; returning None
    keeps the (in-place mutated) current one. Predicates and mutations see a
    context whose ``tree`` is the current tree.
    """

    def __init__(self, transforms: Sequence[TransformSpec]):
        self.transforms = list(transforms)

    async def run(self, state: RunState) -> RunState:
        if not self.transforms:
            return state

        state.context.log.write("Running code transform to add pulumi stack application")
        for i, spec in enumerate(self.transforms):
            label = getattr(spec.mutation, "__name__", f"transform #{i}")
            ctx = replace(state.context, tree=state.tree)
            try:
                wanted = spec.predicate is None or spec.predicate(ctx)
            except Exception as exc:
                log.exception("Predicate for %s failed", label)
                raise TransformFailed(f"code transform {label} predicate failed: {exc}") from exc
            if not wanted:
                log.info("Skipping %s (predicate false)", label)
                continue
            try:
                result = spec.mutation(state.tree, ctx)
            except Exception as exc:
                log.exception("Transform %s failed", label)
                raise TransformFailed(f"code transform {label} failed: {exc}") from exc
            if result is not None:
                state.tree = result
            log.info("Applied %s", label)
        return state
