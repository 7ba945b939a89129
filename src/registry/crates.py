"""crates.io registry client: fetch published versions and build candidate lists."""
from __future__ import annotations

import logging
from typing import Any, List, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, Timer
from errors import EmptyCandidateListError, MalformedResponseError
from versioning.models import CandidateList, ProblemKind, ProblemPackage, VersionRecord
from versioning.ordering import order_newest_first

logger = logging.getLogger(__name__)


def crate_url(name: str, url: Optional[str] = None) -> str:
    """Return the API URL for a crate under the given registry base URL."""
    base = (url or Constants.REGISTRY_URL_CRATES).rstrip("/")
    return base + Constants.REGISTRY_CRATES_API_PATH + quote(name, safe="")


def _decode_versions(name: str, body: Any) -> List[VersionRecord]:
    """Validate the registry body and convert it to VersionRecords.

    A missing ``yanked`` flag counts as not yanked; any other shape mismatch
    raises MalformedResponseError.
    """
    if not isinstance(body, dict):
        raise MalformedResponseError(f"crates.io: response for '{name}' is not a JSON object")
    raw_versions = body.get("versions")
    if not isinstance(raw_versions, list):
        raise MalformedResponseError(f"crates.io: response for '{name}' has no 'versions' array")

    records = []
    for idx, entry in enumerate(raw_versions):
        if not isinstance(entry, dict):
            raise MalformedResponseError(f"crates.io: versions[{idx}] for '{name}' is not an object")
        num = entry.get("num")
        if not isinstance(num, str) or not num:
            raise MalformedResponseError(f"crates.io: versions[{idx}] for '{name}' has no version string")
        yanked = entry.get("yanked", False)
        if yanked is None:
            yanked = False
        if not isinstance(yanked, bool):
            raise MalformedResponseError(
                f"crates.io: versions[{idx}] for '{name}' has a non-boolean 'yanked' flag"
            )
        records.append(VersionRecord(num=num, yanked=yanked))
    return records


def fetch_versions(name: str, url: Optional[str] = None) -> List[VersionRecord]:
    """Fetch every published version of a crate, in registry order.

    Args:
        name (str): Crate name.
        url (str, optional): Registry base URL. Defaults to Constants.REGISTRY_URL_CRATES.

    Raises:
        RegistryError: On transport failure, non-200 status or malformed body.
    """
    fullurl = crate_url(name, url)
    with Timer() as timer:
        body = get_json(fullurl, context="crates.io")
    records = _decode_versions(name, body)
    if is_debug_enabled(logger):
        logger.debug(
            "Fetched crate versions",
            extra=extra_context(
                event="registry_fetch",
                component="crates",
                action="fetch_versions",
                target=name,
                count=len(records),
                duration_ms=timer.duration_ms()
            )
        )
    return records


def get_candidate_versions(name: str, url: Optional[str] = None) -> List[str]:
    """Return up to MAX_CANDIDATES non-yanked versions in registry order."""
    survivors = [r.num for r in fetch_versions(name, url) if not r.yanked]
    return survivors[:Constants.MAX_CANDIDATES]


def build_candidate_list(problem: ProblemPackage, url: Optional[str] = None) -> CandidateList:
    """Fetch and order the candidates for one problem package.

    Missing packages are tried newest first; conflicting packages keep the
    registry's order.

    Raises:
        RegistryError: Fetch failed.
        EmptyCandidateListError: No non-yanked version exists.
        VersionOrderingError: A Missing package's version is not valid semver.
    """
    versions = get_candidate_versions(problem.name, url)
    if not versions:
        raise EmptyCandidateListError(f"crates.io: no usable versions published for '{problem.name}'")
    if problem.kind == ProblemKind.MISSING:
        versions = order_newest_first(versions)
    logger.info("Candidates for %s (%s): %s", problem.name, problem.kind.value, ", ".join(versions))
    return CandidateList(package=problem.name, versions=tuple(versions))
