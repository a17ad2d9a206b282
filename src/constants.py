"""Constants used in the project."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    USAGE_ERROR = 2
    # Shell exit statuses above this are reserved
    MAX_FAILURE_COUNT = 125


class OutputFormats(Enum):
    """Report formats supported by the program.

    Args:
        Enum (string): Report formats supported by the program.
    """

    HUMAN = "human"
    JSON = "json"
    XML = "xml"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REPOSITORY_URL = "https://repo.maven.apache.org/maven2"
    METADATA_FILE = "maven-metadata.xml"
    NOT_AVAILABLE = "N/A"
    OUTPUT_FORMATS = [
        OutputFormats.HUMAN.value,
        OutputFormats.JSON.value,
        OutputFormats.XML.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    SKIP_TLS_VALIDATION = False
    MAX_WORKERS = 8

    # Manifest (pom.xml) processing
    POM_FILE_NAME = "pom.xml"
    POM_FILE_SUFFIX = ".xml"
    POM_URL_SUPPORTED_PROTOCOLS = ["file", "http", "https"]
    TRANSITIVE_DEPS = False
    INCLUDE_SCOPE = "compile"
    INCLUDE_PARENT_POM = False
    MVN_COMMAND = "mvn"

    # GitHub integration
    GH_COMMAND = "gh"
    GITHUB_HOST = "github.com"
    GITHUB_RAW_BASE = "https://raw.githubusercontent.com"

    # Environment and config file locations
    ENV_REPOSITORY_URL = "GAVCHECK_REPOSITORY_URL"
    ENV_SKIP_TLS_VALIDATION = "GAVCHECK_SKIP_TLS_VALIDATION"
    ENV_LOG_LEVEL = "GAVCHECK_LOG_LEVEL"
    CONFIG_FILE_LOCATIONS = [
        "gavcheck.yml",
        "gavcheck.yaml",
        os.path.join("~", ".config", "gavcheck", "gavcheck.yml"),
    ]


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML config file.

    Args:
        path: Explicit config path. When omitted the first existing entry of
            Constants.CONFIG_FILE_LOCATIONS is used.

    Returns:
        The parsed mapping, or an empty dict when no usable file exists.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = [path] if path else [os.path.expanduser(p) for p in Constants.CONFIG_FILE_LOCATIONS]
    for candidate in candidates:
        if not candidate or not os.path.isfile(candidate):
            if path:
                logger.warning("Config file not found: %s", candidate)
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                cfg = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", candidate, exc)
            return {}
        if not isinstance(cfg, dict):
            logger.warning("Ignoring config file %s: top level is not a mapping", candidate)
            return {}
        logger.debug("Loaded config file %s", candidate)
        return cfg
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Copy recognised keys of a loaded config mapping onto Constants.

    Raises:
        ValueError: If ``workers`` is not a positive integer.
    """
    repository = cfg.get("repository") or {}
    if isinstance(repository, dict):
        if repository.get("url"):
            Constants.REPOSITORY_URL = str(repository["url"])
        if "skip_tls_validation" in repository:
            Constants.SKIP_TLS_VALIDATION = bool(repository["skip_tls_validation"])
        if repository.get("timeout") is not None:
            Constants.REQUEST_TIMEOUT = int(repository["timeout"])

    pom = cfg.get("pom") or {}
    if isinstance(pom, dict):
        if "transitive_deps" in pom:
            Constants.TRANSITIVE_DEPS = bool(pom["transitive_deps"])
        if pom.get("include_scope"):
            Constants.INCLUDE_SCOPE = str(pom["include_scope"])
        if "include_parent_pom" in pom:
            Constants.INCLUDE_PARENT_POM = bool(pom["include_parent_pom"])
        protocols = pom.get("supported_protocols")
        if isinstance(protocols, list) and protocols:
            Constants.POM_URL_SUPPORTED_PROTOCOLS = [str(p).lower() for p in protocols]

    if cfg.get("workers") is not None:
        workers = int(cfg["workers"])
        if workers < 1:
            raise ValueError(f"workers must be at least 1 (got {workers})")
        Constants.MAX_WORKERS = workers
