"""Resolver for GitHub repository URLs.

The repository's default branch is looked up with ``gh`` and the pom.xml at
the root of that branch is processed like any other remote pom.
"""
from __future__ import annotations

import logging
import re
from typing import List

from constants import Constants
from common.cli_support import check_command, run_script
from common.errors import UnresolvableSourceError
from versioning.models import Gav
from .base import SourceResolver, is_url
from .pom import process_remote_pom

logger = logging.getLogger(__name__)

REPO_PATTERN = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)/?$",
    re.IGNORECASE,
)


def raw_pom_url(repo_id: str, ref: str) -> str:
    """Raw-content URL of the root pom.xml of ``repo_id`` at ``ref``."""
    return f"{Constants.GITHUB_RAW_BASE}/{repo_id}/{ref}/{Constants.POM_FILE_NAME}"


class GitHubRepositoryResolver(SourceResolver):
    """Lists the dependencies of a GitHub repository's root pom.xml."""

    def applies(self, raw: str) -> bool:
        return is_url(raw) and REPO_PATTERN.match(raw.strip()) is not None

    def default_branch(self, repo_id: str) -> str:
        check_command(Constants.GH_COMMAND)
        proc = run_script(
            Constants.GH_COMMAND,
            "repo",
            "view",
            "--json=defaultBranchRef",
            "--jq=.defaultBranchRef.name",
            repo_id,
        ).assert_ok()
        if not proc.out or not proc.out[0].strip():
            raise UnresolvableSourceError(
                repo_id, f"gh reported no default branch for {repo_id}", detail="\n".join(proc.err)
            )
        return proc.out[0].strip()

    def resolve(self, raw: str) -> List[Gav]:
        logger.debug("Processing GitHub repository: %s", raw)
        m = REPO_PATTERN.match(raw.strip())
        if m is None:
            raise UnresolvableSourceError(raw, f"Not a GitHub repository URL: {raw}")
        repo_id = f"{m.group('owner')}/{m.group('repo')}"
        ref = self.default_branch(repo_id)
        return process_remote_pom(raw_pom_url(repo_id, ref))
