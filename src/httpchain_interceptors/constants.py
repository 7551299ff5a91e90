from enum import StrEnum


class Phase(StrEnum):
    """Pipeline phases a handler can belong to."""

    PRE_SEND = "pre-send"
    DISPATCH = "dispatch"
    POST_RECEIVE = "post-receive"


class ExecutionMode(StrEnum):
    """Strategy used to run the pre-send handlers of a request."""

    DIRECT = "direct"
    SUSPENDED = "suspended"


ENV_PREFIX = "HTTPCHAIN_"
DEFAULT_METHOD = "get"
LOGGER_NAME = "httpchain_interceptors"
