"""RollbarSourceMap plugin: uploads source maps after the build emits.

Hook flow for each build:
1. Validate options; option errors go straight to compilation.errors
2. Pair every chunk's bundle with its source map
3. Upload all pairs concurrently and wait for every upload to settle
4. Route each failure to errors, warnings, or nowhere depending on
   `ignore_errors` and `silent`
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from rollbar_sourcemap.assets import get_assets
from rollbar_sourcemap.compilation import Compilation, Compiler
from rollbar_sourcemap.constants import API_TIMEOUT, PLUGIN_NAME, ROLLBAR_ENDPOINT
from rollbar_sourcemap.errors import handle_error
from rollbar_sourcemap.options import validate_options
from rollbar_sourcemap.types import (
    AssetPair,
    Resolvable,
    RollbarSourceMapOptions,
    normalize_include_chunks,
)
from rollbar_sourcemap.uploader import get_public_path, read_source, upload_source_map

logger = logging.getLogger(__name__)


class RollbarSourceMap:
    """Build plugin that uploads emitted source maps to Rollbar.

    Options can be passed as a RollbarSourceMapOptions or as keyword
    arguments. `transport` is handed to the httpx client, which lets
    callers route uploads through a proxy transport or a mock.
    """

    def __init__(
        self,
        options: Optional[RollbarSourceMapOptions] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs: Any,
    ) -> None:
        if options is None:
            options = RollbarSourceMapOptions(**kwargs)
        elif kwargs:
            raise TypeError("Pass either an options object or keyword options, not both")

        self.access_token: Optional[Resolvable] = options.access_token
        self.version: Optional[Resolvable] = options.version
        self.public_path: Optional[Resolvable] = options.public_path
        self.include_chunks: list[str] = normalize_include_chunks(options.include_chunks)
        self.silent = options.silent
        self.ignore_errors = options.ignore_errors
        self.rollbar_endpoint = options.rollbar_endpoint or ROLLBAR_ENDPOINT
        self.encode_filename = options.encode_filename
        self._transport = transport

    def apply(self, compiler: Compiler) -> None:
        compiler.hooks.after_emit.tap_promise(PLUGIN_NAME, self.after_emit)

    async def after_emit(self, compilation: Compilation) -> None:
        errors = validate_options(self)
        if errors:
            compilation.errors.extend(handle_error(errors))
            return

        failures = await self.upload_source_maps(compilation)
        for failure in failures:
            if not self.ignore_errors:
                compilation.errors.extend(handle_error(failure))
            elif not self.silent:
                logger.warning("%s", failure)
                compilation.warnings.extend(handle_error(failure))

    def get_assets(self, compilation: Compilation) -> list[AssetPair]:
        return get_assets(compilation.chunks, self.include_chunks, self.encode_filename)

    def get_public_path(self, source_file: str) -> str:
        return get_public_path(self.public_path, source_file)

    async def get_source(self, compilation: Compilation, name: str) -> str:
        return await read_source(compilation, name)

    async def upload_source_map(
        self,
        client: httpx.AsyncClient,
        compilation: Compilation,
        asset: AssetPair,
    ) -> None:
        await upload_source_map(client, compilation, asset, self)

    async def upload_source_maps(self, compilation: Compilation) -> list[Exception]:
        """Upload every asset pair concurrently.

        Returns the failures in asset order. One failing upload never
        cancels the others.
        """
        assets = self.get_assets(compilation)
        if not assets:
            return []

        async with httpx.AsyncClient(timeout=API_TIMEOUT, transport=self._transport) as client:
            results = await asyncio.gather(
                *(self.upload_source_map(client, compilation, asset) for asset in assets),
                return_exceptions=True,
            )

        failures: list[Exception] = []
        for result in results:
            if isinstance(result, Exception):
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result

        logger.debug("Uploaded %d/%d source maps", len(assets) - len(failures), len(assets))
        return failures
