"""Error types surfaced to the host build.

Every error keeps the exception it wraps in `cause` so callers can
inspect the original failure after it has been prefixed for display.
"""

from typing import Optional, Sequence, Union

from rollbar_sourcemap.constants import PLUGIN_NAME


class PluginError(Exception):
    """Base class for errors the plugin adds to a compilation."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class OptionsError(PluginError):
    """A required option is missing."""


class OptionsTypeError(OptionsError, TypeError):
    """An option is present but has the wrong type."""


class RollbarUploadError(PluginError):
    """Uploading a single source map failed.

    Raised for read, transport and non-2xx response failures. The message
    always starts with ``failed to upload <source map> to Rollbar``.
    """

    def __init__(self, source_map: str, detail: str, cause: Optional[BaseException] = None):
        self.source_map = source_map
        super().__init__(f"failed to upload {source_map} to Rollbar: {detail}", cause)


def handle_error(
    err: Union[BaseException, Sequence[BaseException], None],
    prefix: str = PLUGIN_NAME,
) -> list[PluginError]:
    """Prefix one error or a list of errors for the compilation channels.

    Returns an empty list for None or an empty sequence.
    """
    if not err:
        return []

    errors = [err] if isinstance(err, BaseException) else list(err)
    return [PluginError(f"{prefix}: {e}", cause=e) for e in errors]
