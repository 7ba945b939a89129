"""Invocation of the cargo build tool.

The probe build captures stderr so its diagnostics can be parsed; trial
builds inherit stdio so the user sees cargo's progress live.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from constants import Constants
from errors import BuildToolError

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one build invocation."""

    success: bool
    diagnostics: str = ""


class CargoBuilder:
    """Runs ``cargo build`` in a project directory."""

    def __init__(self, project_dir: str, command: Optional[str] = None):
        self.project_dir = project_dir
        self.command = command or Constants.CARGO_COMMAND

    def _build_cmd(self, manifest: Optional[str] = None) -> List[str]:
        cmd = [self.command, "build"]
        if manifest:
            cmd += ["--manifest-path", manifest]
        return cmd

    def probe(self) -> BuildResult:
        """Build the unmodified project, capturing diagnostics.

        Raises:
            BuildToolError: If cargo cannot be started.
        """
        cmd = self._build_cmd()
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                cwd=self.project_dir,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise BuildToolError(f"Cannot run {self.command}: {e}") from e
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        return BuildResult(success=result.returncode == 0, diagnostics=stderr)

    def build_with_manifest(self, manifest: str) -> BuildResult:
        """Build against an alternate manifest with cargo's output streamed live.

        Raises:
            BuildToolError: If cargo cannot be started.
        """
        cmd = self._build_cmd(manifest)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, cwd=self.project_dir, check=False)  # noqa: S603
        except OSError as e:
            raise BuildToolError(f"Cannot run {self.command}: {e}") from e
        return BuildResult(success=result.returncode == 0)
