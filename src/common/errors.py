"""Error taxonomy shared by the source resolvers and the resolution engine.

Every error here is fatal only for the single input or identifier that raised
it; callers log it and carry on with the rest of the batch.
"""
from __future__ import annotations

from typing import Optional, Sequence


class GavCheckError(Exception):
    """Base class for all gavcheck failures."""


class ParseError(GavCheckError, ValueError):
    """An input did not match the group:artifact[:version] grammar."""

    def __init__(self, raw: str):
        super().__init__(f"GAV {raw} was not parseable")
        self.raw = raw


class UnresolvableSourceError(GavCheckError):
    """A URL-shaped input could not be turned into any identifiers."""

    def __init__(self, raw: str, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.raw = raw
        self.detail = detail


class ExternalToolError(GavCheckError):
    """An external process exited non-zero or could not be started."""

    def __init__(
        self,
        command: Sequence[str],
        status_code: Optional[int] = None,
        stdout: Sequence[str] = (),
        stderr: Sequence[str] = (),
        message: Optional[str] = None,
    ):
        self.command = list(command)
        self.status_code = status_code
        self.stdout = list(stdout)
        self.stderr = list(stderr)
        if message is None:
            message = "{} exited with status {}\nstdout:\n{}\nstderr:\n{}".format(
                " ".join(self.command),
                status_code,
                "\n".join(self.stdout),
                "\n".join(self.stderr),
            )
        super().__init__(message)


class UnavailableCommandError(ExternalToolError):
    """The requested tool is not installed in the execution environment."""

    def __init__(self, command: str):
        super().__init__([command], message=f"{command} not found in $PATH")


class FetchError(GavCheckError):
    """Repository metadata could not be fetched or parsed."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url
