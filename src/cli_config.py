"""Layering of configuration sources onto Constants.

Precedence, lowest to highest: built-in defaults, the YAML config file,
environment variables, CLI flags.
"""

from __future__ import annotations

import logging
import os

from constants import Constants, _load_yaml_config, apply_config

logger = logging.getLogger(__name__)

_TRUTHY = ("1", "true", "yes", "on")


def apply_env_overrides(environ=None) -> None:
    """Apply GAVCHECK_* environment variables."""
    environ = os.environ if environ is None else environ
    url = environ.get(Constants.ENV_REPOSITORY_URL, "").strip()
    if url:
        Constants.REPOSITORY_URL = url
    skip_tls = environ.get(Constants.ENV_SKIP_TLS_VALIDATION, "").strip()
    if skip_tls:
        Constants.SKIP_TLS_VALIDATION = skip_tls.lower() in _TRUTHY


def apply_cli_overrides(args) -> None:
    """Apply parsed CLI flags; unset flags leave the current value alone."""
    if getattr(args, "REPOSITORY", None):
        Constants.REPOSITORY_URL = args.REPOSITORY
    if getattr(args, "INSECURE", False):
        Constants.SKIP_TLS_VALIDATION = True
    if getattr(args, "WORKERS", None) is not None:
        if args.WORKERS < 1:
            raise ValueError("--workers must be at least 1")
        Constants.MAX_WORKERS = args.WORKERS
    if getattr(args, "TRANSITIVE", None) is not None:
        Constants.TRANSITIVE_DEPS = bool(args.TRANSITIVE)
    if getattr(args, "SCOPE", None):
        Constants.INCLUDE_SCOPE = args.SCOPE
    if getattr(args, "INCLUDE_PARENT_POM", None) is not None:
        Constants.INCLUDE_PARENT_POM = bool(args.INCLUDE_PARENT_POM)


def configure(args, environ=None) -> str:
    """Apply every configuration layer and return the normalised repository root."""
    apply_config(_load_yaml_config(getattr(args, "CONFIG", None)))
    apply_env_overrides(environ)
    apply_cli_overrides(args)
    Constants.REPOSITORY_URL = Constants.REPOSITORY_URL.rstrip("/")
    if Constants.SKIP_TLS_VALIDATION:
        logger.warning("TLS validation is disabled for repository requests.")
    logger.debug("Using repository %s", Constants.REPOSITORY_URL)
    return Constants.REPOSITORY_URL
