"""Maven repository metadata client.

Fetches ``maven-metadata.xml`` for one group:artifact from a repository root
and parses it into a VersionIndex.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List

from constants import Constants
from common import http_client
from common.errors import FetchError
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.models import VersionIndex


logger = logging.getLogger(__name__)


def metadata_url(repo_root: str, group: str, artifact: str) -> str:
    """Build the metadata URL for an artifact.

    Args:
        repo_root: Repository root without a trailing slash.
        group: Maven groupId; dots become path separators.
        artifact: Maven artifactId.

    Returns:
        ``{repo_root}/{group path}/{artifact}/maven-metadata.xml``
    """
    group_path = group.replace(".", "/")
    return f"{repo_root}/{group_path}/{artifact}/{Constants.METADATA_FILE}"


def parse_metadata(text: str, url: str = "") -> VersionIndex:
    """Parse a maven-metadata.xml document.

    Missing <latest>/<release> map to Constants.NOT_AVAILABLE. The version list
    is reversed from document order so the newest version comes first.

    Raises:
        FetchError: If the document is malformed or has no <versioning>/<versions>.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise FetchError(url, f"malformed metadata: {exc}") from exc

    versioning = root.find("versioning")
    if versioning is None:
        raise FetchError(url, "metadata has no <versioning> element")

    latest = _text_or_na(versioning.find("latest"))
    release = _text_or_na(versioning.find("release"))

    versions_elem = versioning.find("versions")
    if versions_elem is None:
        raise FetchError(url, "metadata has no <versions> element")
    versions: List[str] = [
        (v.text or "").strip() for v in versions_elem.findall("version")
    ]
    versions.reverse()

    return VersionIndex(latest=latest, release=release, versions=versions)


def _text_or_na(elem) -> str:
    if elem is None or elem.text is None:
        return Constants.NOT_AVAILABLE
    return elem.text.strip()


def fetch_version_index(repo_root: str, group: str, artifact: str) -> VersionIndex:
    """Fetch and parse the published versions of one artifact.

    Args:
        repo_root: Repository root without a trailing slash.
        group: Maven groupId.
        artifact: Maven artifactId.

    Returns:
        VersionIndex built from the remote metadata.

    Raises:
        FetchError: On network failure, non-200 status or unusable metadata.
    """
    url = metadata_url(repo_root, group, artifact)
    logger.debug("Opening %s ...", safe_url(url))
    res = http_client.safe_get(url, context="maven")

    if is_debug_enabled(logger):
        logger.debug(
            "Maven metadata body",
            extra=extra_context(
                event="fetch",
                component="maven_client",
                action="fetch_metadata",
                target=safe_url(url),
                package_manager="maven"
            )
        )
        logger.debug(res.text)

    index = parse_metadata(res.text, safe_url(url))
    if is_debug_enabled(logger):
        logger.debug(
            "Parsed Maven metadata",
            extra=extra_context(
                event="parse",
                component="maven_client",
                action="fetch_metadata",
                outcome="success",
                count=len(index.versions),
                package_manager="maven"
            )
        )
    return index
