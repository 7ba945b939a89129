"""Semantic-version ordering of candidate lists."""

from typing import List, Sequence

import semantic_version

from errors import VersionOrderingError


def parse_version(v: str) -> semantic_version.Version:
    """Parse a strict semver string.

    Raises:
        VersionOrderingError: If the string is not valid semver.
    """
    try:
        return semantic_version.Version(v)
    except ValueError as exc:
        raise VersionOrderingError(f"Cannot order version '{v}': {exc}") from exc


def order_newest_first(versions: Sequence[str]) -> List[str]:
    """Return versions sorted by descending semver precedence.

    Every string is parsed before sorting, so one bad entry fails the whole
    call rather than producing a partial order.
    """
    parsed = [(parse_version(v), v) for v in versions]
    parsed.sort(key=lambda pair: pair[0], reverse=True)
    return [v for _, v in parsed]
