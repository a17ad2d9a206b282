"""Resolver for URLs pointing at a pom.xml (local file or remote)."""

import logging
from typing import List
from urllib.request import url2pathname

from constants import Constants
from common.logging_utils import safe_url
from versioning.models import Gav
from .base import SourceResolver, parse_url
from .pom import process_pom, process_remote_pom

logger = logging.getLogger(__name__)


class PomUrlResolver(SourceResolver):
    """Lists the dependencies of a pom.xml given by URL.

    ``file:`` URLs are processed in place so relative parent and module
    references keep working; anything else is downloaded first.
    """

    def applies(self, raw: str) -> bool:
        parts = parse_url(raw)
        if parts is None:
            return False
        return (
            parts.scheme.lower() in Constants.POM_URL_SUPPORTED_PROTOCOLS
            and parts.path.endswith(Constants.POM_FILE_SUFFIX)
        )

    def resolve(self, raw: str) -> List[Gav]:
        logger.debug("Processing XML URL: %s", safe_url(raw))
        parts = parse_url(raw)
        if parts is not None and parts.scheme.lower() == "file":
            return process_pom(url2pathname(parts.path))
        return process_remote_pom(raw.strip())
