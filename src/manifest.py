"""Cargo.toml loading and targeted version assignment.

Documents are handled with tomlkit so that comments, ordering and formatting
of everything not explicitly assigned survive a rewrite byte for byte.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Iterator, List

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.toml_document import TOMLDocument

from constants import Constants
from errors import ManifestError
from versioning.models import Combination

logger = logging.getLogger(__name__)


def manifest_path(project_dir: str) -> str:
    """Path of the authoritative manifest."""
    return os.path.join(project_dir, Constants.MANIFEST_FILE)


def trial_manifest_path(project_dir: str) -> str:
    """Path of the disposable manifest rewritten for every trial."""
    return os.path.join(project_dir, Constants.TRIAL_MANIFEST_FILE)


def load_manifest(path: str) -> TOMLDocument:
    """Read and parse a manifest.

    Raises:
        ManifestError: If the file cannot be read, is not UTF-8, or is not valid TOML.
    """
    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read manifest {path}: {e}") from e
    try:
        return tomlkit.parse(text)
    except TOMLKitError as e:
        raise ManifestError(f"Cannot parse manifest {path}: {e}") from e


def _dependency_tables(doc: TOMLDocument) -> Iterator[Mapping]:
    """Top-level dependency tables, then those under ``[target.<cfg>]``."""
    for table_name in Constants.DEPENDENCY_TABLES:
        table = doc.get(table_name)
        if isinstance(table, Mapping):
            yield table
    targets = doc.get("target")
    if isinstance(targets, Mapping):
        for platform in targets.values():
            if not isinstance(platform, Mapping):
                continue
            for table_name in Constants.DEPENDENCY_TABLES:
                table = platform.get(table_name)
                if isinstance(table, Mapping):
                    yield table


def _declaring_tables(doc: TOMLDocument, name: str) -> List[Mapping]:
    """Every dependency table that already declares ``name``."""
    return [table for table in _dependency_tables(doc) if name in table]


def set_dependency_version(doc: TOMLDocument, name: str, version: str) -> None:
    """Assign one dependency version in place.

    Every declaration of ``name`` is updated, including platform-specific
    ones. A plain string requirement is replaced. A table requirement
    (``foo = { version = "1", features = [...] }``) only has its ``version``
    key set. Undeclared names are added to ``[dependencies]``.
    """
    tables = _declaring_tables(doc, name)
    if not tables:
        table = doc.get("dependencies")
        if not isinstance(table, Mapping):
            if table is not None:
                raise ManifestError("[dependencies] is not a table")
            table = tomlkit.table()
            doc["dependencies"] = table
            table = doc["dependencies"]
        logger.debug("Adding %s to [dependencies]", name)
        table[name] = version
        return

    for table in tables:
        entry = table[name]
        if isinstance(entry, Mapping):
            entry["version"] = version
        else:
            table[name] = version


def apply_assignments(doc: TOMLDocument, combination: Combination) -> TOMLDocument:
    """Apply every name -> version assignment of a combination to doc."""
    for name in sorted(combination):
        set_dependency_version(doc, name, combination[name])
    return doc


def render_manifest(doc: TOMLDocument) -> str:
    """Serialize a document back to TOML text."""
    return tomlkit.dumps(doc)


def write_manifest(path: str, text: str) -> None:
    """Overwrite a manifest file with text.

    Raises:
        ManifestError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise ManifestError(f"Cannot write manifest {path}: {e}") from e
