import logging
from typing import Annotated, Literal

from pydantic import AfterValidator, Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import ENV_PREFIX, LOGGER_NAME
from .exceptions import UserFunctionError
from .models import RequestConfig
from .userfunc import import_function


def validate_function_import_name(v: str) -> str:
    try:
        import_function(v)
    except UserFunctionError as e:
        raise ValueError(f"Invalid interceptor function: {e.message}") from e
    return v


FunctionImportName = Annotated[str, AfterValidator(validate_function_import_name)]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ClientSettings(BaseSettings):
    """Client defaults read from HTTPCHAIN_* environment variables."""

    base_url: str | None = Field(default=None)
    timeout: PositiveFloat = Field(default=30.0)
    follow_redirects: bool = Field(default=True)
    raise_for_status: bool = Field(default=True)
    verify: bool = Field(default=True, description="SSL certificate verification.")
    log_level: LogLevel = Field(default="WARNING")
    request_interceptors: list[FunctionImportName] = Field(default_factory=list, description="Pre-send handlers, 'module.path:function'.")
    response_interceptors: list[FunctionImportName] = Field(default_factory=list, description="Post-receive handlers, 'module.path:function'.")

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    def request_defaults(self) -> RequestConfig:
        return RequestConfig(
            base_url=self.base_url,
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            raise_for_status=self.raise_for_status,
        )


def configure_logging(level: LogLevel) -> None:
    logging.getLogger(LOGGER_NAME).setLevel(level)
