"""Concurrent resolution of identifiers against a Maven repository.

Each identifier is handled by its own task on a shared thread pool. Tasks
write into one lock-guarded result map; the caller waits on all of them
before the map is read. A task that fails is logged and leaves no entry.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Dict, Iterable, Mapping, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer
from registry.maven.client import fetch_version_index
from .models import Gav, ResolutionResult, VersionIndex
from .version_match import best_match

logger = logging.getLogger(__name__)

IndexFetcher = Callable[[str, str, str], VersionIndex]


def resolve_gav(gav: Gav, index: VersionIndex) -> ResolutionResult:
    """Compute the result for one identifier from its fetched index.

    An exact-match hit narrows the index to the matched version; a miss keeps
    the full index for diagnostics. In list mode availability means the index
    is non-empty.
    """
    if gav.exact_match:
        match = best_match(gav.version, index.versions)
        if match is not None:
            return ResolutionResult(True, True, VersionIndex.single(match))
        return ResolutionResult(True, False, index)
    return ResolutionResult(False, bool(index.versions), index)


def count_unavailable(results: Mapping[Gav, ResolutionResult]) -> int:
    """Count identifiers that asked for a version that is not available.

    Fetch failures have no entry in ``results`` and are not counted.
    """
    return sum(1 for r in results.values() if r.exact_match and not r.available)


class ResolutionService:
    """Fan identifiers out over a worker pool and collect their results."""

    def __init__(
        self,
        repo_root: str,
        max_workers: Optional[int] = None,
        fetcher: IndexFetcher = fetch_version_index,
    ):
        """Initialize the service.

        Args:
            repo_root: Repository root URL; a trailing slash is trimmed.
            max_workers: Pool size (defaults to Constants.MAX_WORKERS).
            fetcher: Callable (repo_root, group, artifact) -> VersionIndex.
        """
        self.repo_root = repo_root.rstrip("/")
        self.max_workers = max_workers or Constants.MAX_WORKERS
        self._fetcher = fetcher

    def resolve_one(self, gav: Gav) -> ResolutionResult:
        if gav.exact_match:
            logger.debug(
                "Searching %s for version %s of %s from %s",
                self.repo_root, gav.version, gav.artifact, gav.group,
            )
        else:
            logger.debug(
                "Searching %s for available versions of %s from %s",
                self.repo_root, gav.artifact, gav.group,
            )
        index = self._fetcher(self.repo_root, gav.group, gav.artifact)
        return resolve_gav(gav, index)

    def resolve_all(self, gavs: Iterable[Gav]) -> Dict[Gav, ResolutionResult]:
        """Resolve every identifier concurrently.

        Blocks until all tasks have finished. Identifiers whose task failed
        are absent from the returned map.
        """
        gavs = list(gavs)
        results: Dict[Gav, ResolutionResult] = {}
        lock = threading.Lock()

        def _task(gav: Gav) -> None:
            try:
                result = self.resolve_one(gav)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.error(
                    "Failed to resolve %s",
                    gav,
                    exc_info=True,
                    extra=extra_context(
                        event="resolve",
                        component="resolution_service",
                        outcome="exception",
                        target=str(gav)
                    )
                )
                return
            with lock:
                results[gav] = result

        if not gavs:
            return results

        with Timer() as t:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="gavcheck"
            ) as pool:
                futures = [pool.submit(_task, gav) for gav in gavs]
                wait(futures)

        if is_debug_enabled(logger):
            logger.debug(
                "Resolution finished",
                extra=extra_context(
                    event="function_exit",
                    component="resolution_service",
                    action="resolve_all",
                    count=len(gavs),
                    resolved=len(results),
                    duration_ms=t.duration_ms()
                )
            )
        return results
