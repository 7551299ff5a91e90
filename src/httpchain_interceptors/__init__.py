from .chain import AssembledChain, assemble_chain
from .client import Client, Interceptors
from .config import merge_config
from .constants import ExecutionMode, Phase
from .exceptions import (
    ChainAssemblyError,
    ConfigError,
    DispatchConnectError,
    DispatchError,
    DispatchTimeoutError,
    InterceptorError,
    PipelineError,
    PostHandlerError,
    PreHandlerError,
    ResponseStatusError,
    UserFunctionError,
)
from .executor import execute_chain, run_direct, run_pipeline, run_suspended
from .models import HandlerPair, Interceptor, RequestConfig
from .registry import InterceptorRegistry
from .settings import ClientSettings
from .transport import HttpxTransport
from .urls import build_url, combine_urls

__all__ = [
    "AssembledChain",
    "ChainAssemblyError",
    "Client",
    "ClientSettings",
    "ConfigError",
    "DispatchConnectError",
    "DispatchError",
    "DispatchTimeoutError",
    "ExecutionMode",
    "HandlerPair",
    "HttpxTransport",
    "Interceptor",
    "InterceptorError",
    "InterceptorRegistry",
    "Interceptors",
    "Phase",
    "PipelineError",
    "PostHandlerError",
    "PreHandlerError",
    "RequestConfig",
    "ResponseStatusError",
    "UserFunctionError",
    "assemble_chain",
    "build_url",
    "combine_urls",
    "execute_chain",
    "merge_config",
    "run_direct",
    "run_pipeline",
    "run_suspended",
]
