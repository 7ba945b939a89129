"""Extraction of problem packages from cargo's diagnostic output."""

import re
from typing import Iterable, List

from versioning.models import ProblemKind, ProblemPackage

CONFLICT_PATTERNS = [
    re.compile(r"failed to select a version for `([^`]*)`"),
]

MISSING_PATTERNS = [
    re.compile(r"can't find crate for `([^`]*)`"),
    re.compile(r"could not find `([^`]*)` in registry"),
]


def _match_names(patterns: Iterable["re.Pattern"], text: str) -> List[str]:
    """Captured names in order of first appearance in the text, without duplicates."""
    hits = []
    for pattern in patterns:
        for m in pattern.finditer(text):
            name = m.group(1).strip()
            if name:
                hits.append((m.start(), name))
    hits.sort(key=lambda hit: hit[0])

    seen = set()
    names = []
    for _, name in hits:
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def parse_conflicts(text: str) -> List[str]:
    """Names of packages cargo failed to select a version for."""
    return _match_names(CONFLICT_PATTERNS, text)


def parse_missing(text: str) -> List[str]:
    """Names of packages cargo could not find at all."""
    return _match_names(MISSING_PATTERNS, text)


def collect_problem_packages(text: str) -> List[ProblemPackage]:
    """Merge conflict and missing matches into one deduplicated list.

    A name reported both ways is classified as a conflict. Conflicts come
    first, then missing packages, each in order of appearance.
    """
    conflicts = parse_conflicts(text)
    problems = [ProblemPackage(name, ProblemKind.CONFLICT) for name in conflicts]
    known = set(conflicts)
    for name in parse_missing(text):
        if name not in known:
            known.add(name)
            problems.append(ProblemPackage(name, ProblemKind.MISSING))
    return problems
