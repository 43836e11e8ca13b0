"""Configuration validation.

Required options are described once in `REQUIRED_FIELDS` and checked in
that order, so errors come back in a stable, declared order.
"""

from collections.abc import Mapping
from typing import Any, Optional

from rollbar_sourcemap.constants import REQUIRED_FIELDS
from rollbar_sourcemap.errors import OptionsError, OptionsTypeError, PluginError


def _get_field(ref: Any, option_name: str, attribute: str) -> Any:
    """Read a field from a mapping (camelCase keys) or an options object."""
    if ref is None:
        return None
    if isinstance(ref, Mapping):
        return ref.get(option_name, ref.get(attribute))
    return getattr(ref, attribute, None)


def validate_options(ref: Any = None) -> Optional[list[PluginError]]:
    """Return a list of option errors, or None if the options are usable.

    `ref` may be a RollbarSourceMapOptions, a RollbarSourceMap plugin or a
    plain mapping. None is treated as an empty configuration.
    """
    errors: list[PluginError] = []

    for option_name, attribute, type_check in REQUIRED_FIELDS:
        value = _get_field(ref, option_name, attribute)

        if value and type_check is not None and not type_check(value):
            errors.append(
                OptionsTypeError(f"invalid type. '{option_name}' expected to be string or function.")
            )
            continue

        if value:
            continue

        errors.append(OptionsError(f"required field, '{option_name}', is missing."))

    return errors or None
