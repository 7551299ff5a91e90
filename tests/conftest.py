import httpx
import pytest

from httpchain_interceptors import RequestConfig


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Mock server answering with what it received; paths starting with /status/<code> answer that code."""
    if request.url.path.startswith("/status/"):
        return httpx.Response(int(request.url.path.rsplit("/", 1)[-1]), json={"error": "status requested"})

    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "body": request.content.decode(),
        },
    )


@pytest.fixture
def mock_transport():
    return httpx.MockTransport(echo_handler)


@pytest.fixture
def log():
    """Shared list handlers append to, recording execution order."""
    return []


@pytest.fixture
def make_handler(log):
    """Factory for pre-send handlers that record their name and tag the config headers."""

    def _make_handler(name: str, fail: bool = False):
        def handler(config: RequestConfig) -> RequestConfig:
            log.append(name)
            if fail:
                raise ValueError(f"{name} failed")
            return config.model_copy(update={"headers": {**config.headers, f"x-{name.lower()}": name}})

        handler.__qualname__ = name
        return handler

    return _make_handler


@pytest.fixture
def make_dispatch(log):
    """Factory for dispatch callables recording the config they were called with."""

    def _make_dispatch(response: object = "response", dispatched: list | None = None):
        async def settle():
            return response

        def dispatch(config):
            log.append("dispatch")
            if dispatched is not None:
                dispatched.append(config)
            return settle()

        return dispatch

    return _make_dispatch
