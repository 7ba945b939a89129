"""Environment overrides for runtime tunables.

Kept out of winch.py to keep the entrypoint slim. Overrides are applied onto
Constants once at startup; malformed values are logged and ignored.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from constants import Constants

logger = logging.getLogger(__name__)


def apply_env_overrides(environ: Optional[Mapping[str, str]] = None) -> None:
    """Apply WINCH_* environment variables to Constants."""
    env = os.environ if environ is None else environ

    registry_url = env.get(Constants.ENV_REGISTRY_URL, "").strip()
    if registry_url:
        Constants.REGISTRY_URL_CRATES = registry_url.rstrip("/")
        logger.debug("Registry URL overridden: %s", Constants.REGISTRY_URL_CRATES)

    cargo = env.get(Constants.ENV_CARGO, "").strip()
    if cargo:
        Constants.CARGO_COMMAND = cargo
        logger.debug("Cargo command overridden: %s", cargo)

    timeout = env.get(Constants.ENV_REQUEST_TIMEOUT, "").strip()
    if timeout:
        try:
            value = int(timeout)
            if value <= 0:
                raise ValueError("must be positive")
            Constants.REQUEST_TIMEOUT = value
        except ValueError as e:
            logger.warning(
                "Ignoring %s=%r (%s); using %s seconds",
                Constants.ENV_REQUEST_TIMEOUT,
                timeout,
                e,
                Constants.REQUEST_TIMEOUT,
            )
