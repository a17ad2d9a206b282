"""Source resolvers turning raw inputs into identifiers.

Dispatch is first-match over SOURCE_RESOLVERS in the order listed: the
first resolver whose ``applies`` accepts an input produces its identifiers
and no other resolver is consulted. The literal resolver comes last and
accepts anything that is not URL-shaped, so a URL nobody recognises is
reported as unresolvable instead of failing the GAV grammar.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from common.errors import GavCheckError, UnresolvableSourceError
from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import Gav
from .base import SourceResolver, is_url
from .github_pr import GitHubPullRequestResolver
from .github_repo import GitHubRepositoryResolver
from .literal import LiteralGavResolver
from .pom_url import PomUrlResolver

logger = logging.getLogger(__name__)

SOURCE_RESOLVERS: Tuple[SourceResolver, ...] = (
    GitHubPullRequestResolver(),
    GitHubRepositoryResolver(),
    PomUrlResolver(),
    LiteralGavResolver(),
)


def select_resolver(
    raw: str, resolvers: Sequence[SourceResolver] = SOURCE_RESOLVERS
) -> Optional[SourceResolver]:
    """Return the first resolver that applies to ``raw``, or None."""
    for resolver in resolvers:
        if resolver.applies(raw):
            return resolver
    return None


def resolve_input(
    raw: str, resolvers: Sequence[SourceResolver] = SOURCE_RESOLVERS
) -> List[Gav]:
    """Expand one raw input into identifiers.

    Raises:
        UnresolvableSourceError: If no resolver applies.
        GavCheckError: Whatever the chosen resolver raises.
    """
    resolver = select_resolver(raw, resolvers)
    if resolver is None:
        if is_url(raw):
            message = f"No matching integrations found for provided URL {raw}"
        else:
            message = f"No matching integrations found for input {raw}"
        raise UnresolvableSourceError(raw, message)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolver selected",
            extra=extra_context(
                event="decision",
                component="sources",
                action="select_resolver",
                target=raw,
                outcome=resolver.name
            )
        )
    return resolver.resolve(raw)


def resolve_inputs(
    raws: Iterable[str], resolvers: Sequence[SourceResolver] = SOURCE_RESOLVERS
) -> Tuple[List[Gav], List[Tuple[str, GavCheckError]]]:
    """Expand every raw input, containing failures to the input that caused them.

    Returns:
        Tuple of (identifiers in input order, [(raw input, error), ...]).
    """
    gavs: List[Gav] = []
    failures: List[Tuple[str, GavCheckError]] = []
    for raw in raws:
        try:
            gavs.extend(resolve_input(raw, resolvers))
        except GavCheckError as exc:
            logger.error("Could not process %s: %s", raw, exc)
            failures.append((raw, exc))
    logger.debug("Processing GAVs: %s", [str(g) for g in gavs])
    return gavs, failures


__all__ = [
    "SOURCE_RESOLVERS",
    "SourceResolver",
    "GitHubPullRequestResolver",
    "GitHubRepositoryResolver",
    "PomUrlResolver",
    "LiteralGavResolver",
    "select_resolver",
    "resolve_input",
    "resolve_inputs",
]
