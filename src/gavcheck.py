"""gavcheck - Maven dependency availability checker

    Returns:
        int: Exit code; the number of requested versions that are not available
"""
import logging
import os
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import configure
from output import Reporter, get_reporter
from sources import resolve_inputs
from versioning.models import dedupe
from versioning.service import ResolutionService, count_unavailable

logger = logging.getLogger(__name__)


def process(raw_inputs, repo_root, count, reporter: Reporter, stream=None) -> int:
    """Resolve raw inputs, report the results and return the failure count.

    Args:
        raw_inputs (list): GAVs and/or URLs as given by the user.
        repo_root (str): Repository root URL, no trailing slash.
        count (int): Versions to display per result; negative for all.
        reporter (Reporter): Renders the result map.
        stream: Where the report is written (defaults to stdout).

    Returns:
        int: Number of explicitly requested versions that are not available.
    """
    stream = stream or sys.stdout
    gavs, _ = resolve_inputs(raw_inputs)
    gavs = dedupe(gavs)
    if not gavs:
        logger.warning("No GAVs found in the input list.")
        return 0

    svc = ResolutionService(repo_root, max_workers=Constants.MAX_WORKERS)
    results = svc.resolve_all(gavs)
    missing = len(gavs) - len(results)
    if missing:
        logger.warning("%d GAV(s) could not be looked up, see errors above.", missing)

    report = reporter.render(results, repo_root, count)
    if report:
        stream.write(report + "\n")
        stream.flush()

    failures = count_unavailable(results)
    if is_debug_enabled(logger):
        logger.debug(
            "Batch finished",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="process",
                count=len(gavs),
                outcome="unavailable" if failures else "success",
                failures=failures
            )
        )
    return failures


def interactive(repo_root, count, reporter: Reporter, stdin=None, stream=None) -> int:
    """Check whitespace-separated tokens from stdin one at a time."""
    stdin = stdin or sys.stdin
    stream = stream or sys.stdout
    if count == -1:
        count = 1
    stream.write("? ")
    stream.flush()
    for line in stdin:
        for token in line.split():
            stream.write("...\n")
            try:
                process([token], repo_root, count, reporter, stream)
            except Exception:  # pylint: disable=broad-exception-caught
                logger.error("Failed to process %s", token, exc_info=True)
        stream.write("? ")
        stream.flush()
    stream.write("\n")
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        repo_root = configure(args)
        reporter = get_reporter(args.OUTPUT_FORMAT)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.USAGE_ERROR.value)

    count = args.LIMIT if args.LIMIT is not None else -1

    if args.INTERACTIVE:
        sys.exit(interactive(repo_root, count, reporter))

    failures = process(args.inputs, repo_root, count, reporter)
    if failures:
        logger.error("%d requested version(s) are not available in %s", failures, repo_root)
    sys.exit(min(failures, ExitCodes.MAX_FAILURE_COUNT.value))


if __name__ == "__main__":
    main()
