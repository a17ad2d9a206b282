"""Resolver for literal group:artifact[:version] inputs."""

from typing import List

from versioning.models import Gav
from versioning.parser import parse_gav
from .base import SourceResolver, is_url


class LiteralGavResolver(SourceResolver):
    """Fallback resolver: every input that is not a URL is parsed as a GAV."""

    def applies(self, raw: str) -> bool:
        return not is_url(raw)

    def resolve(self, raw: str) -> List[Gav]:
        return [parse_gav(raw)]
