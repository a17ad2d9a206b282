"""Resolver for GitHub pull requests opened by dependency-update bots.

The PR title is tried first (``build(deps): bump g:a from x to y``). When it
does not match, the PR body is scanned for every
``Updates `g:a` from x to y`` line, which is how grouped updates list their
members. Both are fetched with the ``gh`` CLI.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from constants import Constants
from common.cli_support import check_command, run_script
from common.errors import UnresolvableSourceError
from versioning.models import Gav
from .base import SourceResolver, parse_url

logger = logging.getLogger(__name__)

PR_PATH_PATTERN = re.compile(r"^/[\w.-]+/[\w.-]+/pull/\d+/?$")

PR_TITLE_PATTERN = re.compile(
    r"^(?:[\w-]+\(deps(?:-dev)?\): )?bump (?P<group>[a-z0-9._-]+):(?P<artifact>[a-z0-9._-]+)"
    r" from (?:[a-z0-9._-]+) to (?P<version>[a-z0-9._-]+)$",
    re.IGNORECASE,
)

PR_BODY_PATTERN = re.compile(
    r"^Updates `(?P<group>[^:`\s]+):(?P<artifact>[^`\s]+)` from (?P<from>\S+) to (?P<to>\S+?)\s*$",
    re.MULTILINE,
)


def match_title(title: str) -> Optional[Gav]:
    """Parse a dependency-bump PR title, or return None."""
    m = PR_TITLE_PATTERN.match(title.strip())
    if m is None:
        return None
    return Gav(m.group("group"), m.group("artifact"), m.group("version"))


def match_body(body: str) -> List[Gav]:
    """Collect every ``Updates `g:a` from x to y`` entry in document order."""
    return [
        Gav(m.group("group"), m.group("artifact"), m.group("to"))
        for m in PR_BODY_PATTERN.finditer(body)
    ]


class GitHubPullRequestResolver(SourceResolver):
    """Infers identifiers from a github.com pull request URL."""

    def applies(self, raw: str) -> bool:
        parts = parse_url(raw)
        if parts is None:
            return False
        return (
            parts.scheme.lower() in ("http", "https")
            and (parts.hostname or "").lower() == Constants.GITHUB_HOST
            and PR_PATH_PATTERN.match(parts.path) is not None
        )

    def _pr_field(self, url: str, field: str) -> str:
        check_command(Constants.GH_COMMAND)
        proc = run_script(
            Constants.GH_COMMAND, "pr", "view", url, "--json", field, "--jq", f".{field}"
        )
        logger.debug("gh pr view %s: %s", field, proc.out)
        proc.assert_ok()
        return "\n".join(proc.out)

    def resolve(self, raw: str) -> List[Gav]:
        url = raw.strip()
        title = self._pr_field(url, "title")
        title_line = title.splitlines()[0] if title else ""
        gav = match_title(title_line)
        if gav is not None:
            logger.debug(
                'Interpreted GitHub PR title "%s" as request for %s', title_line, gav
            )
            return [gav]
        logger.debug("GitHub PR title of %s did not match, trying body: %s", url, title_line)

        body = self._pr_field(url, "body")
        gavs = match_body(body)
        if not gavs:
            raise UnresolvableSourceError(
                raw,
                f'GitHub PR URL "{url}" was not understandable. Got title: "{title_line}". '
                "Is this a Dependabot Pull Request? Does the title contain a single "
                "GroupId:ArtifactId, or the body a list of 'Updates `groupId:artifactId` "
                f"from $from to $version' lines? Body:\n{body}",
                detail=f"title: {title_line}\nbody:\n{body}",
            )
        for gav in gavs:
            logger.debug("Found %s in GitHub PR body", gav)
        return gavs
