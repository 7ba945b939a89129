"""Shared HTTP helpers used by registry clients.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. Failures are raised as RegistryError
subclasses; a run cannot continue without registry data, so there is
no retry and no cache.
"""
from __future__ import annotations

import logging
import json
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import MalformedResponseError, RegistryConnectionError, RegistryResponseError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": Constants.USER_AGENT,
}


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Raises:
        RegistryConnectionError: On timeout or any transport failure.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout as exc:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            raise RegistryConnectionError(
                f"{context} request to {safe_target} timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise RegistryConnectionError(f"{context} connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Any:
    """Perform a GET request and decode the JSON body.

    Args:
        url: Target URL
        context: Human-readable source tag for logs (e.g., "crates.io")
        headers: Extra request headers merged over DEFAULT_HEADERS
        **kwargs: Additional requests.get parameters

    Returns:
        The decoded JSON document.

    Raises:
        RegistryConnectionError: Transport failure.
        RegistryResponseError: Any status other than 200.
        MalformedResponseError: Body is not valid JSON.
    """
    merged = dict(DEFAULT_HEADERS)
    if headers:
        merged.update(headers)

    res = safe_get(url, context=context, headers=merged, **kwargs)

    if res.status_code == 404:
        logger.warning(
            "HTTP 404 received",
            extra=extra_context(
                event="http_response",
                outcome="not_found",
                status_code=404,
                target=safe_url(url),
                context=context
            )
        )
        raise RegistryResponseError(f"{context}: {safe_url(url)} not found", 404)
    if res.status_code != 200:
        logger.error("%s returned status code %s", context, res.status_code)
        raise RegistryResponseError(
            f"{context}: unexpected status code {res.status_code} from {safe_url(url)}",
            res.status_code,
        )

    try:
        return json.loads(res.text)
    except json.JSONDecodeError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    target=safe_url(url)
                )
            )
        raise MalformedResponseError(f"{context}: response is not valid JSON ({exc})") from exc
