# src/pu_pipeline/stages/manifest.py
from __future__ import annotations

import logging

from pu_pipeline.errors import MissingManifest
from pu_pipeline.pipeline import Stage
from pu_pipeline.types import RunState

log = logging.getLogger(__name__)


class ManifestCheck(Stage):
    """Fail with code 1 unless the provisioning manifest is in the tree."""

    def __init__(self, manifest_path: str = ".pulumi/Pulumi.yaml"):
        self.manifest_path = manifest_path

    async def run(self, state: RunState) -> RunState:
        progress = state.context.log
        if not state.tree.has_file(self.manifest_path):
            progress.write("No pulumi application found in project")
            raise MissingManifest("no application found")
        app_dir = self.manifest_path.rsplit("/", 1)[0] if "/" in self.manifest_path else "."
        progress.write(f"Project has pulumi application in '{app_dir}' directory")
        return state
