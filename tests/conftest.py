"""Shared fixtures for the rollbar_sourcemap test suite.

Uploads go through httpx.MockTransport so no request leaves the process.
Emitted assets are written to a per-test tmp_path output directory.
"""

import os
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from rollbar_sourcemap.compilation import StatsCompilation
from rollbar_sourcemap.plugin import RollbarSourceMap
from rollbar_sourcemap.types import RollbarSourceMapOptions

ACCESS_TOKEN = "aaaabbbbccccddddeeeeffff00001111"
VERSION = "master-latest-sha"
PUBLIC_PATH = "https://my.cdn.net/assets"

SOURCE_MAP = '{"version":3,"sources":[]}'


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep ROLLBAR_* variables and a stray .env out of Settings()."""
    for key in list(os.environ):
        if key.startswith("ROLLBAR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def default_options() -> RollbarSourceMapOptions:
    return RollbarSourceMapOptions(
        access_token=ACCESS_TOKEN,
        version=VERSION,
        public_path=PUBLIC_PATH,
    )


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dist"
    path.mkdir()
    return path


@pytest.fixture
def make_compilation(output_dir: Path) -> Callable[..., StatsCompilation]:
    """Build a compilation and write every listed .map file to disk."""

    def _make(chunks: list[dict], write_maps: bool = True) -> StatsCompilation:
        if write_maps:
            for chunk in chunks:
                for name in list(chunk.get("files", [])) + list(chunk.get("auxiliaryFiles") or []):
                    if name.endswith(".map"):
                        (output_dir / name).write_text(SOURCE_MAP, encoding="utf-8")
        return StatsCompilation(output_path=str(output_dir), chunks=chunks)

    return _make


@pytest.fixture
def mock_plugin(default_options: RollbarSourceMapOptions) -> Callable[..., RollbarSourceMap]:
    """A plugin whose HTTP client talks to `handler` instead of Rollbar."""

    def _make(handler: Callable, **overrides) -> RollbarSourceMap:
        options = RollbarSourceMapOptions(**{**vars(default_options), **overrides})
        return RollbarSourceMap(options, transport=httpx.MockTransport(handler))

    return _make
