"""Request configuration resolution."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import RequestConfig

MERGED_MAPPINGS = ("headers", "params")


def format_validation_error(e: ValidationError) -> str:
    error_details = []
    for error in e.errors():
        loc = " -> ".join(str(x) for x in error["loc"])
        error_details.append(f"  - {loc}: {error['msg']}")
    return "Invalid request configuration:\n" + "\n".join(error_details)


def to_request_config(value: RequestConfig | Mapping[str, Any] | None) -> RequestConfig:
    if isinstance(value, RequestConfig):
        return value
    try:
        return RequestConfig.model_validate(dict(value or {}))
    except ValidationError as e:
        raise ConfigError(format_validation_error(e)) from None


def merge_config(
    defaults: RequestConfig | Mapping[str, Any] | None,
    overrides: RequestConfig | Mapping[str, Any] | None,
) -> RequestConfig:
    """Merge request-specific options over defaults.

    Options explicitly set on the overrides win. Headers and params are
    merged key by key, the override winning on conflicts.

    Raises:
        ConfigError: If either side or the result is not a valid configuration
    """
    base = to_request_config(defaults).model_dump()
    override = to_request_config(overrides)
    update = {**(override.model_extra or {}), **override.model_dump(exclude_unset=True)}

    for key in MERGED_MAPPINGS:
        if key in update:
            update[key] = {**base[key], **update[key]}

    return to_request_config({**base, **update})
