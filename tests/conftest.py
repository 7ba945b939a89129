"""Shared fixtures for winch tests."""

import logging

import pytest

from constants import Constants

SAMPLE_MANIFEST = """# Demo crate used by the resolver tests
[package]
name = "demo"
version = "0.1.0"
edition = "2021"

[dependencies]
foo = "0.9"
serde = { version = "1.0", features = ["derive"] }   # keep features
log = "0.4"

[dev-dependencies]
bar = "0.1"
"""

_TUNABLES = ("REGISTRY_URL_CRATES", "CARGO_COMMAND", "REQUEST_TIMEOUT")


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo any Constants mutation made by environment overrides."""
    saved = {name: getattr(Constants, name) for name in _TUNABLES}
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)


@pytest.fixture
def project_dir(tmp_path):
    """A project directory containing the sample Cargo.toml."""
    (tmp_path / "Cargo.toml").write_text(SAMPLE_MANIFEST, encoding="utf-8")
    return tmp_path


@pytest.fixture
def sample_manifest():
    """Text of the sample Cargo.toml."""
    return SAMPLE_MANIFEST


@pytest.fixture(autouse=True)
def detach_console_handler():
    """Drop the handler configure_logging installs so streams do not leak between tests."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == "winch-console":
            root.removeHandler(handler)
