"""Shared fixtures: Constants snapshots and canned repository metadata."""

from pathlib import Path

import pytest

from constants import Constants
from versioning.models import VersionIndex

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo any Constants mutation a test performs."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)


@pytest.fixture
def slf4j_metadata():
    return (FIXTURES / "slf4j-maven-metadata.xml").read_text(encoding="utf-8")


@pytest.fixture
def slf4j_index():
    return VersionIndex(latest="2.0.12", release="2.0.12", versions=("2.0.12", "2.0.11"))
