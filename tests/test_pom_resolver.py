"""Tests for pom.xml dependency listing and the pom URL resolver."""

import os
from unittest.mock import patch, MagicMock

import pytest

from constants import Constants
from common.cli_support import ScriptResult
from common.errors import ExternalToolError, FetchError, UnavailableCommandError
from sources.pom import mvn_dependency_list_command, parse_dependency_list, process_pom
from sources.pom_url import PomUrlResolver
from versioning.models import Gav

MVN_OUTPUT = """
The following files have been resolved:
   org.x:y:jar:1.0 (scope=compile)
   org.slf4j:slf4j-api:jar:2.0.12
   none
"""


def _fake_mvn(lines=MVN_OUTPUT, status_code=0, seen=None):
    """run_script stand-in that writes ``lines`` to the -DoutputFile path."""
    def _run(*command):
        out_arg = next(a for a in command if a.startswith("-DoutputFile="))
        path = out_arg.split("=", 1)[1]
        if seen is not None:
            seen.append(path)
        if status_code == 0:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(lines)
        return ScriptResult(tuple(command), status_code, ("mvn out",), ("mvn err",))
    return _run


class TestParseDependencyList:
    """Test parsing of mvn dependency:list output."""

    def test_leading_whitespace_and_trailing_text(self):
        assert parse_dependency_list(["   org.x:y:jar:1.0 (scope=compile)"]) == [Gav("org.x", "y", "1.0")]

    def test_non_matching_lines_are_dropped(self):
        lines = ["", "The following files have been resolved:", "none", "org.x:y:jar:1.0"]
        assert parse_dependency_list(lines) == [Gav("org.x", "y", "1.0")]

    def test_order_is_preserved(self):
        lines = ["b:b:jar:2", "a:a:pom:1"]
        assert parse_dependency_list(lines) == [Gav("b", "b", "2"), Gav("a", "a", "1")]


class TestMvnCommand:
    """Test the mvn invocation built from configuration."""

    def test_defaults(self):
        cmd = mvn_dependency_list_command("/p/pom.xml", "/w/deps.txt")
        assert cmd[0] == "mvn"
        assert cmd[-1] == "dependency:list"
        assert "-DincludeScope=compile" in cmd
        assert "-DexcludeTransitive=true" in cmd
        assert "-DincludeParents=false" in cmd
        assert "-DoutputFile=/w/deps.txt" in cmd
        assert "--file=/p/pom.xml" in cmd

    def test_configured_options_pass_through(self):
        Constants.TRANSITIVE_DEPS = True
        Constants.INCLUDE_PARENT_POM = True
        Constants.INCLUDE_SCOPE = "runtime"
        cmd = mvn_dependency_list_command("/p/pom.xml", "/w/deps.txt")
        assert "-DincludeScope=runtime" in cmd
        assert "-DexcludeTransitive=false" in cmd
        assert "-DincludeParents=true" in cmd


class TestProcessPom:
    """Test running mvn with a scoped scratch directory."""

    @patch("sources.pom.check_command")
    @patch("sources.pom.run_script")
    def test_lists_dependencies_and_cleans_up(self, mock_run, _mock_check, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<project/>", encoding="utf-8")
        seen = []
        mock_run.side_effect = _fake_mvn(seen=seen)

        gavs = process_pom(str(pom))

        assert gavs == [Gav("org.x", "y", "1.0"), Gav("org.slf4j", "slf4j-api", "2.0.12")]
        assert len(seen) == 1
        assert not os.path.exists(os.path.dirname(seen[0]))

    @patch("sources.pom.check_command")
    @patch("sources.pom.run_script")
    def test_mvn_failure_raises_and_cleans_up(self, mock_run, _mock_check, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<project/>", encoding="utf-8")
        seen = []
        mock_run.side_effect = _fake_mvn(status_code=1, seen=seen)

        with pytest.raises(ExternalToolError) as excinfo:
            process_pom(str(pom))

        assert excinfo.value.stderr == ["mvn err"]
        assert "mvn err" in str(excinfo.value)
        assert not os.path.exists(os.path.dirname(seen[0]))

    def test_missing_mvn(self, tmp_path):
        pom = tmp_path / "pom.xml"
        pom.write_text("<project/>", encoding="utf-8")
        with patch("common.cli_support.shutil.which", return_value=None):
            with pytest.raises(UnavailableCommandError):
                process_pom(str(pom))


class TestPomUrlResolver:
    """Test the pom URL resolver."""

    @patch("sources.pom_url.process_pom")
    def test_file_url_processed_in_place(self, mock_process):
        mock_process.return_value = [Gav("g", "a", "1")]
        gavs = PomUrlResolver().resolve("file:///home/me/project/pom.xml")
        assert gavs == [Gav("g", "a", "1")]
        mock_process.assert_called_once_with("/home/me/project/pom.xml")

    @patch("sources.pom.check_command")
    @patch("sources.pom.run_script")
    @patch("sources.pom.http_client.download_to")
    def test_remote_pom_downloaded_to_scratch_dir(self, mock_download, mock_run, _mock_check):
        downloaded = []

        def _download(url, path, context):
            downloaded.append(path)
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("<project/>")
            return path
        mock_download.side_effect = _download
        mock_run.side_effect = _fake_mvn()

        gavs = PomUrlResolver().resolve("https://example.com/project/pom.xml")

        assert Gav("org.x", "y", "1.0") in gavs
        assert mock_download.call_args[0][0] == "https://example.com/project/pom.xml"
        assert not os.path.exists(downloaded[0])

    @patch("sources.pom.http_client.download_to")
    def test_download_failure_cleans_up(self, mock_download):
        paths = []

        def _download(url, path, context):
            paths.append(path)
            raise FetchError(url, "HTTP status 404")
        mock_download.side_effect = _download

        with pytest.raises(FetchError):
            PomUrlResolver().resolve("https://example.com/project/pom.xml")
        assert not os.path.exists(os.path.dirname(paths[0]))


class TestDownloadTo:
    """Test streaming a remote file to disk."""

    @patch("common.http_client.requests.get")
    def test_writes_body(self, mock_get, tmp_path):
        from common.http_client import download_to
        res = MagicMock()
        res.status_code = 200
        res.iter_content.return_value = [b"<project>", b"", b"</project>"]
        mock_get.return_value = res

        target = download_to("https://example.com/pom.xml", str(tmp_path / "pom.xml"), context="pom")

        assert (tmp_path / "pom.xml").read_bytes() == b"<project></project>"
        assert target == str(tmp_path / "pom.xml")
        assert mock_get.call_args[1]["stream"] is True
        res.close.assert_called_once()

    @patch("common.http_client.requests.get")
    def test_error_status_releases_connection(self, mock_get, tmp_path):
        from common.http_client import download_to
        res = MagicMock()
        res.status_code = 404
        mock_get.return_value = res

        with pytest.raises(FetchError):
            download_to("https://example.com/pom.xml", str(tmp_path / "pom.xml"), context="pom")

        res.close.assert_called_once()
        res.iter_content.assert_not_called()
        assert not (tmp_path / "pom.xml").exists()
