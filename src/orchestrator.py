"""Resolution run: probe build, diagnose, fetch candidates, trial combinations.

States advance InitialBuild -> Diagnosing -> Fetching -> Trialing and end in
Succeeded, Exhausted or Aborted. Cargo.toml is written at most once, on the
transition to Succeeded after a trial build.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from build_tool import CargoBuilder
from common.logging_utils import extra_context, is_debug_enabled
from diagnostics import collect_problem_packages
from errors import RegistryError, VersionOrderingError
from manifest import manifest_path, write_manifest
from registry.crates import build_candidate_list
from trial import TrialRunner
from versioning.combinations import count_combinations, iter_combinations
from versioning.models import (
    AbortReason,
    CandidateList,
    ProblemPackage,
    ResolutionResult,
    ResolutionState,
)

logger = logging.getLogger(__name__)


def format_combination(combination: Dict[str, str]) -> str:
    """Render a combination as ``a = "1.0", b = "2.0"`` in package order."""
    return ", ".join(f'{name} = "{combination[name]}"' for name in sorted(combination))


class ResolutionOrchestrator:
    """Drives one resolution run for a project directory."""

    def __init__(
        self,
        project_dir: str,
        builder: Optional[CargoBuilder] = None,
        runner: Optional[TrialRunner] = None,
        fetch: Callable[[ProblemPackage], CandidateList] = build_candidate_list,
        status: Callable[[str], None] = print,
    ):
        self.project_dir = project_dir
        self.builder = builder or CargoBuilder(project_dir)
        self.runner = runner or TrialRunner(project_dir, self.builder)
        self.fetch = fetch
        self.status = status
        self.state = ResolutionState.INITIAL_BUILD

    def _enter(self, state: ResolutionState) -> None:
        if is_debug_enabled(logger):
            logger.debug(
                "State transition",
                extra=extra_context(
                    event="state_transition",
                    component="orchestrator",
                    source=self.state.value,
                    target=state.value
                )
            )
        self.state = state

    def run(self) -> ResolutionResult:
        """Execute the run to a terminal state.

        Raises:
            ManifestError: Cargo.toml or the trial manifest could not be read or written.
            BuildToolError: Cargo could not be started.
        """
        self.status(f"Running winch in directory: {self.project_dir}")
        self._enter(ResolutionState.INITIAL_BUILD)
        probe = self.builder.probe()
        if probe.success:
            self._enter(ResolutionState.SUCCEEDED)
            self.status("Cargo build succeeded. No dependency issues detected.")
            return ResolutionResult(state=self.state)

        self.status("Build failed. Detecting dependency issues...")
        self._enter(ResolutionState.DIAGNOSING)
        problems = collect_problem_packages(probe.diagnostics)
        if not problems:
            self._enter(ResolutionState.ABORTED)
            logger.debug("Unparsed diagnostics:\n%s", probe.diagnostics)
            self.status("No parseable dependency issues found. Manual intervention required.")
            return ResolutionResult(state=self.state, reason=AbortReason.NO_PARSEABLE_ISSUE)

        self.status(
            "Problematic crates detected: "
            + ", ".join(f"{p.name} ({p.kind.value})" for p in problems)
        )

        self._enter(ResolutionState.FETCHING)
        candidates: Dict[str, CandidateList] = {}
        for problem in problems:
            try:
                candidates[problem.name] = self.fetch(problem)
            except (RegistryError, VersionOrderingError) as e:
                self._enter(ResolutionState.ABORTED)
                logger.error("Fetching candidates for %s failed: %s", problem.name, e)
                self.status(f"Could not fetch candidate versions for {problem.name}.")
                return ResolutionResult(
                    state=self.state,
                    problems=problems,
                    candidates=candidates,
                    reason=AbortReason.FETCH_FAILED,
                    error=e,
                )

        return self._trial(problems, candidates)

    def _trial(self, problems, candidates: Dict[str, CandidateList]) -> ResolutionResult:
        self._enter(ResolutionState.TRIALING)
        lists = {name: cl.versions for name, cl in candidates.items()}
        self.status(f"Trying {count_combinations(lists)} version combinations...")

        trials = 0
        for combination in iter_combinations(lists):
            trials += 1
            self.status(f"Trying combination: {format_combination(combination)}")
            if self.runner.run(combination):
                write_manifest(manifest_path(self.project_dir), self.runner.last_rendered)
                self._enter(ResolutionState.SUCCEEDED)
                self.status(f"Build succeeded with combination: {format_combination(combination)}")
                self.status("Cargo.toml updated with working versions.")
                return ResolutionResult(
                    state=self.state,
                    problems=problems,
                    candidates=candidates,
                    combination=combination,
                    trials=trials,
                )
            self.status("Build failed. Trying next combination...")

        self._enter(ResolutionState.EXHAUSTED)
        self.status("All combinations failed. Manual intervention required.")
        return ResolutionResult(
            state=self.state,
            problems=problems,
            candidates=candidates,
            trials=trials,
        )
