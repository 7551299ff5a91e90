"""Exception classes for httpchain-interceptors."""

from typing import Any

from .constants import Phase


class PipelineError(Exception):
    """Base exception for all httpchain-interceptors errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(PipelineError):
    """An error validating request configuration."""


class UserFunctionError(PipelineError):
    """An error resolving a user-defined interceptor function."""


class ChainAssemblyError(PipelineError):
    """An error building the handler chain for a request."""


class InterceptorError(PipelineError):
    """A failure raised by an interceptor handler."""

    phase: Phase

    def __init__(self, message: str, handler_name: str):
        super().__init__(message)
        self.handler_name = handler_name


class PreHandlerError(InterceptorError):
    """A failure raised by a pre-send handler."""

    phase = Phase.PRE_SEND


class PostHandlerError(InterceptorError):
    """A failure raised by a post-receive handler."""

    phase = Phase.POST_RECEIVE


class DispatchError(PipelineError):
    """An error making the HTTP call."""


class DispatchTimeoutError(DispatchError):
    """The HTTP call timed out."""


class DispatchConnectError(DispatchError):
    """The HTTP call could not connect."""


class ResponseStatusError(DispatchError):
    """The server answered with an error status."""

    def __init__(self, message: str, response: Any):
        super().__init__(message)
        self.response = response
