"""Data models for problem detection, candidate versions and resolution runs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ProblemKind(Enum):
    """How the build tool reported a package."""
    CONFLICT = "conflict"
    MISSING = "missing"


@dataclass(frozen=True)
class ProblemPackage:
    """A package implicated by the failed build's diagnostics."""
    name: str
    kind: ProblemKind


@dataclass(frozen=True)
class VersionRecord:
    """One entry of the registry's ``versions`` array."""
    num: str
    yanked: bool


@dataclass(frozen=True)
class CandidateList:
    """Ordered versions to try for one package."""
    package: str
    versions: Tuple[str, ...]


# One full trial: package name -> chosen version.
Combination = Dict[str, str]


class ResolutionState(Enum):
    """States of a resolution run; the last three are terminal."""
    INITIAL_BUILD = "initial_build"
    DIAGNOSING = "diagnosing"
    FETCHING = "fetching"
    TRIALING = "trialing"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"


class AbortReason(Enum):
    """Why a run stopped before trialing."""
    NO_PARSEABLE_ISSUE = "no_parseable_issue"
    FETCH_FAILED = "fetch_failed"


@dataclass
class ResolutionResult:
    """Outcome of a resolution run, fed to the CLI for reporting and exit codes."""
    state: ResolutionState
    problems: List[ProblemPackage] = field(default_factory=list)
    candidates: Dict[str, CandidateList] = field(default_factory=dict)
    combination: Optional[Combination] = None
    trials: int = 0
    reason: Optional[AbortReason] = None
    error: Optional[Exception] = None
