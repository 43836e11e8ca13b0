"""Asset enumeration: pairs each bundle with its source map.

Chunks come from the bundler's stats output in one of two shapes:
webpack 4 lists the map next to the bundle in `files`, webpack 5 moves it
to `auxiliaryFiles`. `normalize_chunk()` folds both into a StatsChunk
before any matching happens.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Optional, Union
from urllib.parse import quote

from rollbar_sourcemap.types import AssetPair, StatsChunk

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves untouched besides alphanumerics and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"

RawChunk = Union[StatsChunk, Mapping]


def normalize_chunk(chunk: RawChunk) -> StatsChunk:
    """Return a StatsChunk for either a StatsChunk or a stats dict."""
    if isinstance(chunk, StatsChunk):
        return chunk
    return StatsChunk.from_dict(dict(chunk))


def encode_filename(filename: str) -> str:
    """Percent-encode a filename as a single URI component."""
    return quote(filename, safe=_URI_COMPONENT_SAFE)


def _first_matching(files: Iterable[str], suffix: str) -> Optional[str]:
    return next((f for f in files if f.endswith(suffix)), None)


def get_assets(
    chunks: Iterable[RawChunk],
    include_chunks: Optional[list[str]] = None,
    encode: bool = False,
) -> list[AssetPair]:
    """Build the list of (minified file, source map) pairs to upload.

    Chunks not in a non-empty `include_chunks` are skipped, including
    unnamed ones. Chunks without a .js file or a .js.map file contribute
    nothing. Order follows the input chunks.
    """
    include_chunks = include_chunks or []
    assets: list[AssetPair] = []

    for raw in chunks:
        chunk = normalize_chunk(raw)
        if include_chunks and chunk.name not in include_chunks:
            continue

        source_file = _first_matching(chunk.files, ".js")
        map_candidates = chunk.auxiliary_files if chunk.auxiliary_files is not None else chunk.files
        source_map = _first_matching(map_candidates, ".js.map")

        if not source_file or not source_map:
            logger.debug("Skipping chunk %r: no bundle/source map pair", chunk.name)
            continue

        assets.append(AssetPair(
            source_file=encode_filename(source_file) if encode else source_file,
            source_map=source_map,
        ))

    return assets
