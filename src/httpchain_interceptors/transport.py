import logging
from collections.abc import Mapping
from typing import Any, Self

import httpx

from .config import to_request_config
from .exceptions import DispatchConnectError, DispatchError, DispatchTimeoutError, ResponseStatusError
from .models import RequestConfig
from .urls import build_url, resolve_url

logger = logging.getLogger(__name__)


def build_request_kwargs(config: RequestConfig) -> dict[str, Any]:
    request_kwargs: dict[str, Any] = {
        "method": config.method.upper(),
        "url": build_url(resolve_url(config), config.params),
        "headers": config.headers,
        "timeout": config.timeout,
        "follow_redirects": config.follow_redirects,
    }

    if config.json_body is not None:
        request_kwargs["json"] = config.json_body
    if config.data is not None:
        request_kwargs["data"] = config.data
    if config.content is not None:
        request_kwargs["content"] = config.content

    return request_kwargs


class HttpxTransport:
    """Dispatches resolved request configurations through an httpx.AsyncClient.

    A client passed in stays owned by the caller and is not closed here.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(verify=verify, transport=transport)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def dispatch_request(self, config: RequestConfig | Mapping[str, Any]) -> httpx.Response:
        """Send the request described by the configuration.

        Interceptors may hand over a plain mapping, it is validated here.

        Raises:
            DispatchTimeoutError: If the request timed out
            DispatchConnectError: If the server could not be reached
            ResponseStatusError: On 4xx/5xx when config.raise_for_status is set
            DispatchError: On any other httpx failure
        """
        config = to_request_config(config)
        request_kwargs = build_request_kwargs(config)
        logger.info(f"Dispatching {request_kwargs['method']} {request_kwargs['url']}")

        try:
            response = await self._client.request(**request_kwargs)
        except httpx.TimeoutException as e:
            raise DispatchTimeoutError(f"HTTP request timed out: {str(e)}") from e
        except httpx.ConnectError as e:
            raise DispatchConnectError(f"HTTP connection error: {str(e)}") from e
        except httpx.HTTPError as e:
            raise DispatchError(f"HTTP request failed: {str(e)}") from e

        logger.info(f"Received {response.status_code} from {request_kwargs['method']} {request_kwargs['url']}")

        if config.raise_for_status and response.is_error:
            raise ResponseStatusError(f"Request failed with status code {response.status_code}", response)

        return response
