"""Tests for resolver selection and per-input failure containment."""

from unittest.mock import patch

import pytest

from common.errors import ExternalToolError, ParseError, UnresolvableSourceError
from sources import (
    SOURCE_RESOLVERS,
    GitHubPullRequestResolver,
    GitHubRepositoryResolver,
    LiteralGavResolver,
    PomUrlResolver,
    resolve_input,
    resolve_inputs,
    select_resolver,
)
from sources.base import is_url
from versioning.models import Gav


class TestIsUrl:
    """Test URL detection for raw inputs."""

    @pytest.mark.parametrize("raw", [
        "https://github.com/owner/repo",
        "http://example.com/pom.xml",
        "file:///tmp/project/pom.xml",
        "file:/tmp/project/pom.xml",
    ])
    def test_urls(self, raw):
        assert is_url(raw)

    @pytest.mark.parametrize("raw", [
        "org.slf4j:slf4j-api:2.0.12",
        "info.picocli:picocli",
        "https:",
        "not a url",
    ])
    def test_not_urls(self, raw):
        assert not is_url(raw)


class TestResolverOrder:
    """Test first-match dispatch over the ordered registry."""

    def test_registry_order_is_explicit(self):
        assert [type(r) for r in SOURCE_RESOLVERS] == [
            GitHubPullRequestResolver,
            GitHubRepositoryResolver,
            PomUrlResolver,
            LiteralGavResolver,
        ]

    @pytest.mark.parametrize("raw,expected", [
        ("https://github.com/owner/repo/pull/42", GitHubPullRequestResolver),
        ("https://github.com/owner/repo/pull/42/", GitHubPullRequestResolver),
        ("https://github.com/owner/repo", GitHubRepositoryResolver),
        ("https://www.github.com/owner/repo.name/", GitHubRepositoryResolver),
        ("https://example.com/project/pom.xml", PomUrlResolver),
        ("file:///home/me/project/pom.xml", PomUrlResolver),
        ("org.slf4j:slf4j-api:2.0.12", LiteralGavResolver),
        ("garbage", LiteralGavResolver),
    ])
    def test_selects_expected_resolver(self, raw, expected):
        assert isinstance(select_resolver(raw), expected)

    @pytest.mark.parametrize("raw", [
        "https://example.com/readme.md",
        "https://github.com/owner/repo/issues/3",
        "ftp://example.com/pom.xml",
    ])
    def test_unknown_url_is_unresolvable(self, raw):
        assert select_resolver(raw) is None
        with pytest.raises(UnresolvableSourceError) as excinfo:
            resolve_input(raw)
        assert excinfo.value.raw == raw

    def test_first_applicable_resolver_wins(self):
        class Always(LiteralGavResolver):
            def applies(self, raw):
                return True

            def resolve(self, raw):
                return [Gav("first", "wins")]

        class Never(LiteralGavResolver):
            def resolve(self, raw):
                raise AssertionError("must not be consulted")

        assert resolve_input("g:a", [Always(), Never()]) == [Gav("first", "wins")]

    def test_supported_protocols_are_configurable(self):
        from constants import Constants
        Constants.POM_URL_SUPPORTED_PROTOCOLS = ["https"]
        assert select_resolver("file:///tmp/pom.xml") is None


class TestResolveInputs:
    """Test batch expansion."""

    def test_literal_inputs(self):
        gavs, failures = resolve_inputs(["org.slf4j:slf4j-api:2.0.12", "info.picocli:picocli"])
        assert gavs == [Gav("org.slf4j", "slf4j-api", "2.0.12"), Gav("info.picocli", "picocli")]
        assert failures == []

    def test_bad_input_does_not_abort_batch(self):
        gavs, failures = resolve_inputs(["bad", "g:a:1", "https://example.com/x.txt"])
        assert gavs == [Gav("g", "a", "1")]
        assert [raw for raw, _ in failures] == ["bad", "https://example.com/x.txt"]
        assert isinstance(failures[0][1], ParseError)
        assert isinstance(failures[1][1], UnresolvableSourceError)

    @patch("sources.pom_url.process_remote_pom")
    def test_external_tool_failure_is_contained(self, mock_process):
        mock_process.side_effect = ExternalToolError(["mvn"], 1, ["out"], ["err"])
        gavs, failures = resolve_inputs(["https://example.com/pom.xml", "g:a"])
        assert gavs == [Gav("g", "a")]
        assert isinstance(failures[0][1], ExternalToolError)
