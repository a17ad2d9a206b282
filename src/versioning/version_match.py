"""Version matching against a repository's published version list.

A requested version ``R`` is considered present as a published version ``V``
when ``V`` starts with ``R + "-"`` or ``R + "."``, or is ``R`` itself. This
tolerates qualifier suffixes added on the repository side, so a request for
``2.17`` is served by ``2.17.0`` or ``2.17-beta``. It is a plain prefix test:
no semantic version ordering is involved and ties go to list order.
"""
from __future__ import annotations

from typing import Iterable, Optional

_SEPARATORS = ("-", ".")


def version_matches(requested: str, found: str) -> bool:
    """Return True if ``found`` satisfies a request for ``requested``."""
    if found == requested:
        return True
    return any(found.startswith(requested + sep) for sep in _SEPARATORS)


def best_match(requested: str, versions: Iterable[str]) -> Optional[str]:
    """Find the first published version satisfying the request.

    Args:
        requested: Version string from the identifier.
        versions: Published versions, newest first.

    Returns:
        The first matching version, or None.
    """
    for candidate in versions:
        if version_matches(requested, candidate):
            return candidate
    return None

