"""Source map uploader: sends one bundle/source map pair to Rollbar.

The upload flow for each pair:
1. Read the source map from the build's output directory
2. POST a multipart form (access_token, version, minified_url, source_map)
3. Turn any read, transport or non-2xx failure into a RollbarUploadError

Callers share one httpx.AsyncClient across concurrent uploads.
"""

import asyncio
import logging
import os
from http import HTTPStatus
from typing import Protocol

import httpx

from rollbar_sourcemap.compilation import Compilation
from rollbar_sourcemap.errors import RollbarUploadError
from rollbar_sourcemap.types import AssetPair, Resolvable, resolve_value

logger = logging.getLogger(__name__)


class UploadSettings(Protocol):
    """The option fields an upload reads. RollbarSourceMap satisfies this."""

    access_token: Resolvable
    version: Resolvable
    public_path: Resolvable
    rollbar_endpoint: str
    silent: bool


def get_asset_path(output_path: str, name: str) -> str:
    """Join the output directory and an asset name, dropping any query string."""
    return os.path.join(output_path, name.split("?")[0])


async def read_source(compilation: Compilation, name: str) -> str:
    """Read an emitted asset without blocking the event loop."""
    path = get_asset_path(compilation.output_path, name)
    return await asyncio.to_thread(compilation.read_file, path)


def get_public_path(public_path: Resolvable, source_file: str) -> str:
    """Return the public URL of a minified file.

    A string public path gets exactly one "/" before the filename. A
    callable is given the filename and its result is used as-is.
    """
    if isinstance(public_path, str):
        sep = "" if public_path.endswith("/") else "/"
        return f"{public_path}{sep}{source_file}"
    return public_path(source_file)


def get_details_from_status(response: httpx.Response) -> str:
    """Describe a failed response by its status code and reason phrase."""
    status = response.status_code
    if response.reason_phrase:
        return f"{status} - {response.reason_phrase}"

    try:
        return f"{status} - {HTTPStatus(status).phrase}"
    except ValueError:
        return f"{status} - Unknown Status Code"


def _get_error_details(response: httpx.Response) -> str:
    """Prefer Rollbar's JSON `message`, fall back to the HTTP status."""
    try:
        body = response.json()
    except ValueError:
        return get_details_from_status(response)

    message = body.get("message") if isinstance(body, dict) else None
    if message is not None:
        return str(message)
    return get_details_from_status(response)


async def upload_source_map(
    client: httpx.AsyncClient,
    compilation: Compilation,
    asset: AssetPair,
    settings: UploadSettings,
) -> None:
    """Upload a single source map.

    Raises:
        RollbarUploadError: If the map cannot be read, the request cannot
            be sent, or Rollbar answers with a non-2xx status.
    """
    try:
        source = await read_source(compilation, asset.source_map)
    except (OSError, ValueError) as exc:
        raise RollbarUploadError(asset.source_map, str(exc), cause=exc) from exc

    # Option resolvers are user code; their failures belong to this asset.
    try:
        data = {
            "access_token": resolve_value(settings.access_token),
            "version": resolve_value(settings.version),
            "minified_url": get_public_path(settings.public_path, asset.source_file),
        }
    except Exception as exc:
        raise RollbarUploadError(asset.source_map, str(exc), cause=exc) from exc
    files = {
        "source_map": (asset.source_map, source.encode("utf-8"), "application/json"),
    }

    endpoint = settings.rollbar_endpoint
    try:
        response = await client.post(endpoint, data=data, files=files)
    except httpx.RequestError as exc:
        raise RollbarUploadError(
            asset.source_map,
            f"request to {endpoint} failed, reason: {exc}",
            cause=exc,
        ) from exc

    if not response.is_success:
        raise RollbarUploadError(asset.source_map, _get_error_details(response))

    if not settings.silent:
        logger.info("Uploaded %s to Rollbar", asset.source_map)
