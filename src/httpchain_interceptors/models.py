from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from http import HTTPMethod
from typing import Annotated, Any, NamedTuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, JsonValue, PositiveFloat

from .constants import DEFAULT_METHOD

SuccessHandler = Callable[[Any], Any | Awaitable[Any]]
FailureHandler = Callable[[Exception], Any | Awaitable[Any]]
ActivationPredicate = Callable[["RequestConfig"], bool]


def validate_http_method(v: str) -> str:
    if v.upper() not in HTTPMethod.__members__:
        raise ValueError(f"Unsupported HTTP method: '{v}'")
    return v.lower()


HttpMethodName = Annotated[str, AfterValidator(validate_http_method)]


class RequestConfig(BaseModel):
    """Resolved configuration of one request.

    Extra fields are kept so interceptors can carry their own data along the chain.
    """

    url: str = Field(default="", description="Request URL, absolute or relative to base_url.")
    base_url: str | None = Field(default=None, description="Prefix for relative URLs.")
    method: HttpMethodName = Field(default=DEFAULT_METHOD, description="HTTP method, normalised to lower case.")
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, Any] = Field(default_factory=dict, description="Query string parameters.")
    data: dict[str, Any] | None = Field(default=None, description="Form data to be URL-encoded.")
    json_body: JsonValue | None = Field(default=None, description="JSON data to send.")
    content: str | bytes | None = Field(default=None, description="Raw body content.")
    timeout: PositiveFloat = Field(default=30.0, description="Request timeout in seconds.")
    follow_redirects: bool = Field(default=True, description="Whether to follow redirects.")
    raise_for_status: bool = Field(default=True, description="Fail the request on 4xx/5xx responses.")

    model_config = ConfigDict(extra="allow")


@dataclass(frozen=True)
class Interceptor:
    """One registered handler pair with its registration options."""

    on_fulfilled: SuccessHandler | None = None
    on_rejected: FailureHandler | None = None
    synchronous: bool = False
    run_when: ActivationPredicate | None = None
    name: str = "<anonymous>"

    def is_active(self, config: RequestConfig) -> bool:
        if self.run_when is None:
            return True
        return self.run_when(config) is not False

    @property
    def pair(self) -> "HandlerPair":
        return HandlerPair(self.on_fulfilled, self.on_rejected, self.name)


class HandlerPair(NamedTuple):
    on_fulfilled: SuccessHandler | None
    on_rejected: FailureHandler | None
    name: str


HandlerSequence = tuple[HandlerPair, ...]
