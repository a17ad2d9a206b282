"""Base class and helpers shared by the source resolvers."""

from abc import ABC, abstractmethod
from typing import List, Optional
from urllib.parse import SplitResult, urlsplit

from versioning.models import Gav

# Schemes a raw input must carry to be treated as a URL rather than a GAV.
# "org.slf4j:slf4j-api" parses with scheme "org.slf4j", so a bare colon is
# not enough.
URL_SCHEMES = ("http", "https", "file", "ftp", "jar")


def parse_url(raw: str) -> Optional[SplitResult]:
    """Return the split URL if ``raw`` is a well-formed URL, else None."""
    try:
        parts = urlsplit(raw.strip())
    except ValueError:
        return None
    if parts.scheme.lower() not in URL_SCHEMES:
        return None
    if parts.scheme.lower() in ("http", "https", "ftp") and not parts.netloc:
        return None
    if not parts.netloc and not parts.path:
        return None
    return parts


def is_url(raw: str) -> bool:
    return parse_url(raw) is not None


class SourceResolver(ABC):
    """Turns one class of raw input into zero or more identifiers."""

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def applies(self, raw: str) -> bool:
        """Return True if this resolver understands ``raw``."""

    @abstractmethod
    def resolve(self, raw: str) -> List[Gav]:
        """Expand ``raw`` into identifiers.

        Raises:
            GavCheckError: Any subclass; fatal for this input only.
        """
