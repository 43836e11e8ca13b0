"""Tests for the rollbar-sourcemap command.

httpx.AsyncClient is swapped for a client bound to a MockTransport so
the command never reaches the network.
"""

import json

import httpx
import pytest

from rollbar_sourcemap import cli


@pytest.fixture
def build(tmp_path):
    """Write a stats file and the source map it references."""
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "app.81c1.js.map").write_text('{"version":3,"sources":[]}', encoding="utf-8")
    stats = {
        "outputPath": str(dist),
        "chunks": [{"id": 1, "names": ["app"], "files": ["app.81c1.js", "app.81c1.js.map"]}],
    }
    stats_file = tmp_path / "stats.json"
    stats_file.write_text(json.dumps(stats), encoding="utf-8")
    return stats_file


@pytest.fixture
def rollbar(monkeypatch):
    """Route uploads to a handler; returns the list of captured requests."""
    requests: list[httpx.Request] = []
    status = {"code": 200}
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status["code"], json={"message": "invalid access token"})

    def client_factory(**kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(**kwargs)

    monkeypatch.setattr("rollbar_sourcemap.plugin.httpx.AsyncClient", client_factory)
    return requests, status


class TestMain:
    def test_uploads_and_exits_zero(self, build, rollbar):
        requests, _ = rollbar

        code = cli.main([
            "--stats", str(build),
            "--access-token", "tok",
            "--version", "abc123",
            "--public-path", "https://cdn.example.com/js",
        ])

        assert code == 0
        assert len(requests) == 1
        assert b"https://cdn.example.com/js/app.81c1.js" in requests[0].content

    def test_reports_errors_and_exits_one(self, build, rollbar, capsys):
        _, status = rollbar
        status["code"] = 403

        code = cli.main([
            "--stats", str(build),
            "--access-token", "tok",
            "--version", "abc123",
            "--public-path", "https://cdn.example.com/js",
        ])

        assert code == 1
        assert (
            "ERROR RollbarSourceMap: failed to upload app.81c1.js.map to Rollbar: invalid access token"
            in capsys.readouterr().err
        )

    def test_ignore_errors_exits_zero_with_warning(self, build, rollbar, capsys):
        _, status = rollbar
        status["code"] = 403

        code = cli.main([
            "--stats", str(build),
            "--access-token", "tok",
            "--version", "abc123",
            "--public-path", "https://cdn.example.com/js",
            "--ignore-errors",
        ])

        assert code == 0
        assert "WARNING RollbarSourceMap: failed to upload" in capsys.readouterr().err

    def test_missing_options_are_build_errors(self, build, rollbar, capsys):
        requests, _ = rollbar

        code = cli.main(["--stats", str(build), "--access-token", "tok"])

        err = capsys.readouterr().err
        assert code == 1
        assert requests == []
        assert "required field, 'version', is missing." in err
        assert "required field, 'publicPath', is missing." in err

    def test_environment_supplies_options(self, build, rollbar, monkeypatch):
        requests, _ = rollbar
        monkeypatch.setenv("ROLLBAR_ACCESS_TOKEN", "env-token")
        monkeypatch.setenv("ROLLBAR_VERSION", "env-version")
        monkeypatch.setenv("ROLLBAR_PUBLIC_PATH", "https://env.example.com")

        assert cli.main(["--stats", str(build), "--version", "flag-version"]) == 0
        assert b"env-token" in requests[0].content
        assert b"flag-version" in requests[0].content
        assert b"env-version" not in requests[0].content

    def test_include_chunk_filters_uploads(self, build, rollbar):
        requests, _ = rollbar

        code = cli.main([
            "--stats", str(build),
            "--access-token", "tok",
            "--version", "abc123",
            "--public-path", "https://cdn.example.com/js",
            "--include-chunk", "vendor",
        ])

        assert code == 0
        assert requests == []

    def test_unreadable_stats_file(self, tmp_path, rollbar):
        assert cli.main(["--stats", str(tmp_path / "missing.json")]) == 2
