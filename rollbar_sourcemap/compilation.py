"""Host build-tool interface.

The plugin only needs a small slice of what a bundler exposes after
emitting assets: the output directory, the chunk list, a file reader and
the error/warning lists it reports into. `Compilation` describes that
slice structurally so any host can satisfy it.

`StatsCompilation` is the concrete host used by the CLI: it is built from
a webpack `stats.json` and the directory the assets were written to.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Compilation(Protocol):
    output_path: str
    chunks: Sequence[Any]
    errors: list
    warnings: list

    def read_file(self, path: str) -> str: ...


@dataclass
class StatsCompilation:
    """A compilation reconstructed from bundler stats output."""

    output_path: str
    chunks: list[dict] = field(default_factory=list)
    errors: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    def read_file(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    @classmethod
    def from_stats(cls, stats: dict, output_path: str | None = None) -> "StatsCompilation":
        """Build from a parsed stats dict.

        The stats' own `outputPath` is used when `output_path` is not given.
        """
        resolved = output_path or stats.get("outputPath") or "."
        chunks = stats.get("chunks") or []
        return cls(output_path=str(resolved), chunks=list(chunks))

    @classmethod
    def from_stats_file(cls, path: str | Path, output_path: str | None = None) -> "StatsCompilation":
        stats = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(stats, dict):
            raise ValueError(f"Invalid stats file {path}: expected a JSON object")
        logger.debug("Loaded stats from %s (%d chunks)", path, len(stats.get("chunks") or []))
        return cls.from_stats(stats, output_path)


class AsyncSeriesHook:
    """Ordered list of async callbacks awaited one after another."""

    def __init__(self) -> None:
        self.taps: list[tuple[str, Callable[..., Awaitable[Any]]]] = []

    def tap_promise(self, name: str, fn: Callable[..., Awaitable[Any]]) -> None:
        self.taps.append((name, fn))

    async def call(self, *args: Any) -> None:
        for name, fn in self.taps:
            logger.debug("Running after_emit tap %s", name)
            await fn(*args)


@dataclass
class CompilerHooks:
    after_emit: AsyncSeriesHook = field(default_factory=AsyncSeriesHook)


@dataclass
class Compiler:
    """Minimal compiler that plugins attach to via `apply()`."""

    hooks: CompilerHooks = field(default_factory=CompilerHooks)

    async def emit(self, compilation: Compilation) -> None:
        """Signal that assets have been written for `compilation`."""
        await self.hooks.after_emit.call(compilation)
