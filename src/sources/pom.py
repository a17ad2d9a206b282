"""Shared pom.xml processing for the manifest-based resolvers.

Dependencies are listed by running ``mvn dependency:list`` against the pom
and reading back the file it writes. Scratch files live in a temporary
directory that is removed however processing ends.
"""
from __future__ import annotations

import logging
import os
import re
import tempfile
from typing import Iterable, List

from constants import Constants
from common import http_client
from common.cli_support import check_command, run_script
from common.logging_utils import is_debug_enabled, safe_url
from versioning.models import Gav

logger = logging.getLogger(__name__)

DEP_PATTERN = re.compile(
    r"^\s*(?P<group>[a-z0-9._-]+):(?P<artifact>[a-z0-9._-]+):(?P<packaging>[a-z0-9._-]+)"
    r":(?P<version>[a-z0-9._-]+).*",
    re.IGNORECASE,
)

_DEPS_FILE = "deps.txt"


def parse_dependency_list(lines: Iterable[str]) -> List[Gav]:
    """Turn ``group:artifact:packaging:version`` lines into identifiers.

    Lines that do not match are dropped.
    """
    gavs: List[Gav] = []
    for line in lines:
        logger.debug("dependency: %s", line)
        m = DEP_PATTERN.match(line)
        if m is None:
            continue
        gavs.append(Gav(m.group("group"), m.group("artifact"), m.group("version")))
    return gavs


def mvn_dependency_list_command(pom_path: str, output_file: str) -> List[str]:
    """Build the mvn invocation listing dependencies of ``pom_path``."""
    return [
        Constants.MVN_COMMAND,
        "-B",
        "-q",
        "-Dsilent",
        f"-DincludeScope={Constants.INCLUDE_SCOPE}",
        f"-DexcludeTransitive={str(not Constants.TRANSITIVE_DEPS).lower()}",
        f"-DincludeParents={str(Constants.INCLUDE_PARENT_POM).lower()}",
        "-Dmdep.outputScope=false",
        f"-DoutputFile={os.path.abspath(output_file)}",
        f"--file={os.path.abspath(pom_path)}",
        "dependency:list",
    ]


def process_pom(pom_path: str) -> List[Gav]:
    """List the dependencies declared by a local pom.xml.

    Raises:
        ExternalToolError: If mvn is missing or exits non-zero.
    """
    logger.debug("Processing XML file: %s", pom_path)
    if is_debug_enabled(logger):
        with open(pom_path, "r", encoding="utf-8", errors="replace") as fh:
            logger.debug(fh.read())

    check_command(Constants.MVN_COMMAND)
    with tempfile.TemporaryDirectory(prefix="gavcheck-deps-") as work_dir:
        deps_file = os.path.join(work_dir, _DEPS_FILE)
        run_script(*mvn_dependency_list_command(pom_path, deps_file)).assert_ok()
        with open(deps_file, "r", encoding="utf-8") as fh:
            return parse_dependency_list(fh.read().splitlines())


def process_remote_pom(url: str) -> List[Gav]:
    """Download a pom.xml to a scratch directory and list its dependencies.

    Raises:
        FetchError: If the download fails.
        ExternalToolError: If mvn is missing or exits non-zero.
    """
    logger.debug("Downloading %s", safe_url(url))
    with tempfile.TemporaryDirectory(prefix="gavcheck-pom-") as work_dir:
        pom_path = os.path.join(work_dir, Constants.POM_FILE_NAME)
        http_client.download_to(url, pom_path, context="pom")
        return process_pom(pom_path)
