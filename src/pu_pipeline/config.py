# src/pu_pipeline/config.py
from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field          # Field stays in pydantic


class Settings(BaseSettings):
    """
    Central configuration for the provisioning pipeline.

    Any field can be overridden via environment variables prefixed
    with  `PU_PIPELINE_`, e.g.

        export PU_PIPELINE_ACCESS_TOKEN=pul-xxxxxxxx
        python -m pu_pipeline.cli up …

    See https://docs.pydantic.dev/latest/concepts/settings/ for details.
    """

    #  credentials
    access_token: Optional[str] = Field(
        None,
        description="Process-wide access token, used when a run does not supply one.",
    )
    token_env_var: str = Field(
        "PULUMI_ACCESS_TOKEN",
        description="Environment variable the provisioning tool reads its token from.",
    )

    # manifest location (relative to the working tree)
    manifest_dir: str = Field(".pulumi")
    manifest_file: str = Field("Pulumi.yaml")

    # external commands
    package_manager: str = Field("npm")
    provisioning_tool: str = Field("pulumi")

    # diagnostics
    tail_lines: int = Field(
        40,
        description="Trailing output lines kept on a ProcessOutcome for failure reports.",
    )
    log_level: str = Field("INFO")

    # pydantic-v2
    model_config = {"env_prefix": "pu_pipeline_"}

    @property
    def manifest_path(self) -> str:
        return f"{self.manifest_dir}/{self.manifest_file}"
