"""Token parsing utilities for literal group:artifact[:version] identifiers."""

import re

from common.errors import ParseError
from .models import Gav

GAV_PATTERN = re.compile(
    r"^(?P<group>[a-z0-9._-]+):(?P<artifact>[a-z0-9._-]+)(?::(?P<version>[a-z0-9._-]+))?$",
    re.IGNORECASE,
)


def parse_gav(token: str) -> Gav:
    """Parse a literal GAV token.

    Args:
        token: Text such as ``org.slf4j:slf4j-api:2.0.12`` or ``info.picocli:picocli``.

    Returns:
        The identifier; version is None when the token has only two parts.

    Raises:
        ParseError: If the token does not match the grammar.
    """
    match = GAV_PATTERN.match(token.strip())
    if match is None:
        raise ParseError(token)
    return Gav(match.group("group"), match.group("artifact"), match.group("version"))


def format_gav(gav: Gav) -> str:
    """Inverse of parse_gav; also the sort key reporters order results by."""
    return str(gav)
