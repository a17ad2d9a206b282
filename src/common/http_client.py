"""Shared HTTP helpers used by the metadata client and the manifest resolvers.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. Failures surface as FetchError so that a
single bad identifier never takes the whole run down.
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from constants import Constants
from common.errors import FetchError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8 * 1024


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "maven", "pom").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object, always with a 200 status.

    Raises:
        FetchError: On timeout, connection failure or a non-200 status.
    """
    safe_target = safe_url(url)
    kwargs.setdefault("verify", not Constants.SKIP_TLS_VALIDATION)
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
            raise FetchError(safe_target, "request timed out") from exc
        except requests.RequestException as exc:  # includes ConnectionError
            logger.error("%s connection error: %s", context, exc)
            raise FetchError(safe_target, f"connection error: {exc}") from exc

    if res.status_code != 200:
        logger.warning(
            "HTTP non-2xx",
            extra=extra_context(
                event="http_response",
                component="http_client",
                outcome="non_2xx",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )
        res.close()
        raise FetchError(safe_target, f"HTTP status {res.status_code}")

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )
    return res


def download_to(url: str, path: str, *, context: str) -> str:
    """Stream a remote resource into a local file.

    Args:
        url: Source URL.
        path: Destination file path; overwritten if present.
        context: Human-readable source tag for logs.

    Returns:
        The destination path.
    """
    res = safe_get(url, context=context, stream=True)
    try:
        with open(path, "wb") as fh:
            for chunk in res.iter_content(chunk_size=_CHUNK_SIZE):
                if chunk:
                    fh.write(chunk)
    except requests.RequestException as exc:
        raise FetchError(safe_url(url), f"download interrupted: {exc}") from exc
    finally:
        res.close()
    return path
