"""Single trial: apply one combination to a scratch manifest and build it."""

from __future__ import annotations

import logging
from typing import Optional

from build_tool import CargoBuilder
from manifest import (
    apply_assignments,
    load_manifest,
    manifest_path,
    render_manifest,
    trial_manifest_path,
    write_manifest,
)
from versioning.models import Combination

logger = logging.getLogger(__name__)


class TrialRunner:
    """Builds the project once per combination against Cargo.winch.toml.

    Every trial starts from a fresh read of Cargo.toml, so trials do not
    influence one another. The trial manifest is overwritten each time and
    left on disk afterwards.
    """

    def __init__(self, project_dir: str, builder: CargoBuilder):
        self.project_dir = project_dir
        self.builder = builder
        self.source_path = manifest_path(project_dir)
        self.trial_path = trial_manifest_path(project_dir)
        self.last_rendered: Optional[str] = None

    def prepare(self, combination: Combination) -> str:
        """Write the trial manifest for a combination and return its text."""
        doc = load_manifest(self.source_path)
        apply_assignments(doc, combination)
        text = render_manifest(doc)
        write_manifest(self.trial_path, text)
        self.last_rendered = text
        return text

    def run(self, combination: Combination) -> bool:
        """Run one trial build. Returns True on success."""
        self.prepare(combination)
        result = self.builder.build_with_manifest(self.trial_path)
        logger.debug("Trial %s -> %s", combination, "ok" if result.success else "failed")
        return result.success
