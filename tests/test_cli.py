"""Tests for the Typer command line interface."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from orgposts import cli
from orgposts.fetcher import QiitaFetcher
from orgposts.reporting import EMPTY_RESULT_TEXT
from orgposts.state import MISSING_DATES_MESSAGE

runner = CliRunner()


@pytest.fixture
def serve(monkeypatch: pytest.MonkeyPatch):
    """Route the CLI's fetcher through a mock transport answering with ``response``."""
    requests: list[httpx.Request] = []

    def install(response: httpx.Response) -> list[httpx.Request]:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return response

        def build(timeout: float = 10.0) -> QiitaFetcher:
            return QiitaFetcher(timeout=timeout, transport=httpx.MockTransport(handler))

        monkeypatch.setattr(cli, "QiitaFetcher", build)
        return requests

    return install


class TestSearchCommand:
    def test_text_format_prints_grouped_block(self, serve, january_payload):
        requests = serve(httpx.Response(200, json=january_payload))

        result = runner.invoke(
            cli.app, ["--start", "2024-01-01", "--end", "2024-01-31", "--format", "text"]
        )

        assert result.exit_code == 0
        assert "- alice (2件)\n  - [alice1]" in result.output
        assert "- bob (1件)\n  - [bob1]" in result.output
        assert result.output.index("alice2") < result.output.index("- bob (1件)")
        assert requests[0].url.params["query"] == (
            "org:craftsman_software created:>=2024-01-01 created:<=2024-01-31"
        )

    def test_text_format_writes_file_verbatim(self, serve, january_payload, tmp_path: Path):
        serve(httpx.Response(200, json=january_payload))
        destination = tmp_path / "posts.md"

        result = runner.invoke(
            cli.app,
            ["-s", "2024-01-01", "-e", "2024-01-31", "-f", "text", "-o", str(destination)],
        )

        assert result.exit_code == 0
        content = destination.read_text(encoding="utf-8")
        assert content.startswith("- alice (2件)\n")
        assert content.endswith("2024年1月12日")

    def test_cli_format_reports_placeholder(self, serve):
        serve(httpx.Response(200, json=[]))

        result = runner.invoke(cli.app, ["--start", "2024-01-01", "--end", "2024-01-31"])

        assert result.exit_code == 0
        assert EMPTY_RESULT_TEXT in result.output

    def test_empty_start_fails_without_request(self, serve):
        requests = serve(httpx.Response(200, json=[]))

        result = runner.invoke(cli.app, ["--start", "", "--end", "2024-01-31"])

        assert result.exit_code == 1
        assert MISSING_DATES_MESSAGE in result.output
        assert requests == []

    def test_api_error_exits_with_status(self, serve):
        serve(httpx.Response(503))

        result = runner.invoke(
            cli.app, ["--start", "2024-01-01", "--end", "2024-01-31", "--format", "text"]
        )

        assert result.exit_code == 1
        assert "503" in result.output

    def test_non_string_author_exits_with_parse_message(self, serve, payload_factory):
        payload = [payload_factory("numeric", "alice", "2024-01-05T10:00:00+09:00")]
        payload[0]["user"]["id"] = 123
        serve(httpx.Response(200, json=payload))

        result = runner.invoke(cli.app, ["--start", "2024-01-01", "--end", "2024-01-31"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "author_id" in result.output
        assert "AttributeError" not in result.output

    def test_web_format_writes_html(self, serve, january_payload, tmp_path: Path):
        serve(httpx.Response(200, json=january_payload))

        result = runner.invoke(
            cli.app,
            ["-s", "2024-01-01", "-e", "2024-01-31", "-f", "web", "-o", str(tmp_path / "report")],
        )

        assert result.exit_code == 0
        html = (tmp_path / "report.html").read_text(encoding="utf-8")
        assert "- alice (2件)" in html
        assert "<textarea" in html

    def test_web_format_into_directory_uses_default_name(self, serve, tmp_path: Path):
        serve(httpx.Response(200, json=[]))

        result = runner.invoke(
            cli.app, ["-s", "2024-01-01", "-e", "2024-01-31", "-f", "web", "-o", str(tmp_path)]
        )

        assert result.exit_code == 0
        assert (tmp_path / "orgposts__2024-01-01__2024-01-31.html").exists()
