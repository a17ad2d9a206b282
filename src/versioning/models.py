"""Data models for identifiers, repository version indexes and results."""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from constants import Constants


@dataclass(frozen=True)
class Gav:
    """A Maven group:artifact[:version] identifier.

    A version of None means "list every available version"; any string,
    including the empty one, asks whether that exact version is available.
    """
    group: str
    artifact: str
    version: Optional[str] = None

    @property
    def exact_match(self) -> bool:
        return self.version is not None

    def __str__(self) -> str:
        if self.version is None:
            return f"{self.group}:{self.artifact}"
        return f"{self.group}:{self.artifact}:{self.version}"


@dataclass(frozen=True)
class VersionIndex:
    """Published versioning metadata of one artifact, newest version first."""
    latest: str = Constants.NOT_AVAILABLE
    release: str = Constants.NOT_AVAILABLE
    versions: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but always store an immutable copy
        object.__setattr__(self, "versions", tuple(self.versions))

    @classmethod
    def single(cls, version: str) -> "VersionIndex":
        """Index narrowed to one matched version."""
        return cls(latest=version, release=version, versions=(version,))

    def limit(self, count: int) -> "VersionIndex":
        """Return a copy keeping at most ``count`` versions; negative means all."""
        if count < 0 or count >= len(self.versions):
            return self
        return VersionIndex(self.latest, self.release, self.versions[:count])


@dataclass(frozen=True)
class ResolutionResult:
    """Per-identifier outcome of a resolution run.

    In exact-match mode ``available`` says whether the requested version was
    found; in list mode it says whether any version is published at all.
    """
    exact_match: bool
    available: bool
    version_index: VersionIndex

    def limit(self, count: int) -> "ResolutionResult":
        return ResolutionResult(self.exact_match, self.available, self.version_index.limit(count))


def dedupe(gavs: Sequence[Gav]) -> Tuple[Gav, ...]:
    """Drop repeated identifiers, keeping first-seen order."""
    return tuple(dict.fromkeys(gavs))
