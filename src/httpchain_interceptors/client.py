"""Client facade: defaults, interceptor registries and the request entry point."""

import logging
from collections.abc import Awaitable, Mapping
from typing import Any, Self

from .config import merge_config, to_request_config
from .exceptions import PipelineError
from .executor import Dispatch, run_pipeline, settle_failure
from .models import RequestConfig
from .registry import InterceptorRegistry
from .settings import ClientSettings, configure_logging
from .transport import HttpxTransport
from .urls import build_url, resolve_url

logger = logging.getLogger(__name__)

ConfigInput = RequestConfig | Mapping[str, Any] | None


class Interceptors:
    """The pre-send (request) and post-receive (response) registries of a client."""

    def __init__(self) -> None:
        self.request = InterceptorRegistry()
        self.response = InterceptorRegistry()


def _body_options(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, str | bytes):
        return {"content": data}
    return {"json_body": data}


class Client:
    """HTTP client running every request through its interceptor chain.

    Example:
        >>> client = Client({"base_url": "https://api.example.com"})
        >>> client.interceptors.request.use(add_token, synchronous=True)
        >>> response = await client.get("/users")
    """

    def __init__(
        self,
        defaults: ConfigInput = None,
        transport: HttpxTransport | None = None,
        dispatch: Dispatch | None = None,
    ):
        self.defaults = to_request_config(defaults)
        self.transport = transport or HttpxTransport()
        self.dispatch: Dispatch = dispatch or self.transport.dispatch_request
        self.interceptors = Interceptors()

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None, transport: HttpxTransport | None = None) -> Self:
        """Create a client configured from settings, registering the interceptors they name."""
        settings = settings or ClientSettings()
        configure_logging(settings.log_level)

        client = cls(settings.request_defaults(), transport or HttpxTransport(verify=settings.verify))
        for name in settings.request_interceptors:
            client.interceptors.request.use_named(name)
        for name in settings.response_interceptors:
            client.interceptors.response.use_named(name)
        return client

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    def request(self, config: ConfigInput | str = None) -> Awaitable[Any]:
        """Send a request through the interceptor chain.

        Registry snapshots are taken now; interceptors added or ejected later
        do not affect this request. With only synchronous pre-send
        interceptors they run before this method returns.

        Args:
            config: Request options merged over the client defaults, or a URL

        Returns:
            Awaitable settling to the final response or raising the final failure
        """
        if isinstance(config, str):
            config = {"url": config}

        try:
            resolved = merge_config(self.defaults, config)
        except PipelineError as e:
            return settle_failure(e)

        logger.debug(
            f"Request {resolved.method.upper()} {resolved.url} "
            f"(request interceptors v{self.interceptors.request.version}, response interceptors v{self.interceptors.response.version})"
        )
        return run_pipeline(
            resolved,
            self.interceptors.request.snapshot(),
            self.interceptors.response.snapshot(),
            self.dispatch,
        )

    def _with_options(self, config: ConfigInput, **options: Any) -> dict[str, Any]:
        given = to_request_config(config)
        return {**(given.model_extra or {}), **given.model_dump(exclude_unset=True), **options}

    def _send(self, method: str, url: str, config: ConfigInput, **options: Any) -> Awaitable[Any]:
        try:
            merged = self._with_options(config, method=method, url=url, **options)
        except PipelineError as e:
            return settle_failure(e)
        return self.request(merged)

    def get(self, url: str, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("get", url, config)

    def delete(self, url: str, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("delete", url, config)

    def head(self, url: str, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("head", url, config)

    def options(self, url: str, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("options", url, config)

    def post(self, url: str, data: Any = None, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("post", url, config, **_body_options(data))

    def put(self, url: str, data: Any = None, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("put", url, config, **_body_options(data))

    def patch(self, url: str, data: Any = None, config: ConfigInput = None) -> Awaitable[Any]:
        return self._send("patch", url, config, **_body_options(data))

    def get_uri(self, config: ConfigInput = None) -> str:
        """URL a request with these options would be sent to, query included, without leading '?'."""
        resolved = merge_config(self.defaults, config)
        return build_url(resolve_url(resolved), resolved.params).removeprefix("?")
