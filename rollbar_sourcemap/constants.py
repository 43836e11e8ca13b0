"""Constants shared by the plugin, validator and uploader."""

from typing import Callable

PLUGIN_NAME = "RollbarSourceMap"

ROLLBAR_ENDPOINT = "https://api.rollbar.com/api/1/sourcemap"

# Timeout for each source map POST
API_TIMEOUT = 30


def _is_string_or_callable(value: object) -> bool:
    return isinstance(value, str) or callable(value)


# (option name, plugin attribute, type check) evaluated in order by
# validate_options(). A type check of None means any truthy value passes.
REQUIRED_FIELDS: list[tuple[str, str, Callable[[object], bool] | None]] = [
    ("accessToken", "access_token", None),
    ("version", "version", None),
    ("publicPath", "public_path", _is_string_or_callable),
]
