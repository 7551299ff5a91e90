"""Interceptors importable by name in tests."""

from httpchain_interceptors import RequestConfig

NOT_CALLABLE = "not a function"


def add_trace_header(config: RequestConfig) -> RequestConfig:
    config.headers["x-trace"] = "trace-1"
    return config


def response_json(response):
    return response.json()


def recover_with_marker(error: Exception) -> dict:
    return {"recovered": type(error).__name__}
