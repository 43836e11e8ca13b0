"""Upload JavaScript source maps to Rollbar after a build.

Public API:
    RollbarSourceMap(options | **options) -> plugin with apply(compiler)
    RollbarSourceMapOptions, StatsChunk, AssetPair
    validate_options(options) -> list[PluginError] | None
    get_assets(chunks, include_chunks, encode) -> list[AssetPair]
    handle_error(err, prefix) -> list[PluginError]
    Compiler, StatsCompilation
"""

from rollbar_sourcemap.assets import get_assets
from rollbar_sourcemap.compilation import Compilation, Compiler, StatsCompilation
from rollbar_sourcemap.constants import PLUGIN_NAME, ROLLBAR_ENDPOINT
from rollbar_sourcemap.errors import (
    OptionsError,
    OptionsTypeError,
    PluginError,
    RollbarUploadError,
    handle_error,
)
from rollbar_sourcemap.options import validate_options
from rollbar_sourcemap.plugin import RollbarSourceMap
from rollbar_sourcemap.types import AssetPair, RollbarSourceMapOptions, StatsChunk

__all__ = [
    "RollbarSourceMap",
    "RollbarSourceMapOptions",
    "StatsChunk",
    "AssetPair",
    "Compilation",
    "Compiler",
    "StatsCompilation",
    "validate_options",
    "get_assets",
    "handle_error",
    "PluginError",
    "OptionsError",
    "OptionsTypeError",
    "RollbarUploadError",
    "PLUGIN_NAME",
    "ROLLBAR_ENDPOINT",
]
