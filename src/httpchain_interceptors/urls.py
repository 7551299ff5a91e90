import re
from collections.abc import Mapping
from typing import Any

import httpx

from .models import RequestConfig

ABSOLUTE_URL_PATTERN = re.compile(r"^([a-z][a-z\d+\-.]*:)?//", re.IGNORECASE)


def is_absolute_url(url: str) -> bool:
    return ABSOLUTE_URL_PATTERN.match(url) is not None


def combine_urls(base_url: str, relative_url: str) -> str:
    if not relative_url:
        return base_url
    return f"{base_url.rstrip('/')}/{relative_url.lstrip('/')}"


def build_url(url: str, params: Mapping[str, Any] | None = None) -> str:
    """Append query parameters to a URL, keeping any query it already has.

    Parameters set to None are left out.
    """
    present = {key: value for key, value in (params or {}).items() if value is not None}
    if not present:
        return url
    return str(httpx.URL(url).copy_merge_params(present))


def resolve_url(config: RequestConfig) -> str:
    if config.base_url and not is_absolute_url(config.url):
        return combine_urls(config.base_url, config.url)
    return config.url
