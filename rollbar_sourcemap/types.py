"""Types for the source map upload plugin.

Options accept either literal strings or callables for the access token,
version and public path. `resolve_value()` turns either form into the
string that is actually sent to Rollbar.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from rollbar_sourcemap.constants import ROLLBAR_ENDPOINT

Resolvable = Union[str, Callable[..., Any]]


def resolve_value(value: Resolvable, *args: Any) -> str:
    """Return the literal value, or call the resolver with ``args``."""
    if isinstance(value, str):
        return value
    return value(*args)


def normalize_include_chunks(include_chunks: Optional[Union[str, list[str]]]) -> list[str]:
    """Accept a single chunk name or a list of names."""
    if not include_chunks:
        return []
    if isinstance(include_chunks, str):
        return [include_chunks]
    return list(include_chunks)


@dataclass
class RollbarSourceMapOptions:
    """Plugin configuration.

    access_token, version and public_path are required; validate_options()
    reports them when missing. public_path may be a callable that maps a
    minified filename to its public URL.
    """

    access_token: Optional[Resolvable] = None
    version: Optional[Resolvable] = None
    public_path: Optional[Resolvable] = None
    include_chunks: Union[str, list[str]] = field(default_factory=list)
    silent: bool = False
    ignore_errors: bool = False
    rollbar_endpoint: str = ROLLBAR_ENDPOINT
    encode_filename: bool = False


@dataclass
class StatsChunk:
    """One chunk as described by the bundler's stats output.

    webpack 5 lists source maps in `auxiliary_files`, webpack 4 lists them
    alongside the bundle in `files`. None means the list was not reported.
    """

    names: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    auxiliary_files: Optional[list[str]] = None

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""

    @classmethod
    def from_dict(cls, data: dict) -> "StatsChunk":
        auxiliary = data.get("auxiliaryFiles")
        return cls(
            names=list(data.get("names") or []),
            files=list(data.get("files") or []),
            auxiliary_files=list(auxiliary) if auxiliary is not None else None,
        )


@dataclass(frozen=True)
class AssetPair:
    """A minified file and its source map, ready for upload."""

    source_file: str
    source_map: str
