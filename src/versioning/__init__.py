"""Version models, semver ordering and combination enumeration."""

from .models import (
    AbortReason,
    CandidateList,
    Combination,
    ProblemKind,
    ProblemPackage,
    ResolutionResult,
    ResolutionState,
    VersionRecord,
)
from .combinations import count_combinations, iter_combinations, iter_index_vectors

__all__ = [
    "AbortReason",
    "CandidateList",
    "Combination",
    "ProblemKind",
    "ProblemPackage",
    "ResolutionResult",
    "ResolutionState",
    "VersionRecord",
    "count_combinations",
    "iter_combinations",
    "iter_index_vectors",
]
