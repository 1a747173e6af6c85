import base64
from logging import getLogger
from typing import List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictBytes,
    StrictFloat,
    StrictInt,
    StrictStr,
)

logger = getLogger("apifast")

HeaderValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, StrictBytes]


class Header(BaseModel):
    """A single request header.

    Values are limited to scalars and are rendered when applied to the
    request: strings UTF-8 encoded, booleans as ``true``/``false``, numbers
    via ``str()``, bytes unchanged.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1)
    value: HeaderValue

    def rendered(self) -> Union[str, bytes]:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, bytes):
            return self.value
        if isinstance(self.value, str):
            return self.value.encode("utf-8")
        return str(self.value)


class Auth(BaseModel):
    """Credentials for the ``Authorization`` header.

    Basic credentials take precedence over a bearer token when both are
    present; see :meth:`authorization`.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = Field(default="", repr=False)
    token: str = Field(default="", repr=False)

    @classmethod
    def basic(cls, username: str, password: str) -> "Auth":
        return cls(username=username, password=password)

    @classmethod
    def bearer(cls, token: str) -> "Auth":
        return cls(token=token)

    @property
    def has_basic(self) -> bool:
        return bool(self.username and self.password)

    def authorization(self) -> Optional[str]:
        """Return the ``Authorization`` header value, or None without credentials."""
        if self.has_basic:
            if self.token:
                logger.warning(
                    "Both basic credentials and a bearer token were supplied; "
                    "using basic authentication"
                )
            encoded = base64.b64encode(
                f"{self.username}:{self.password}".encode()
            ).decode("ascii")
            return f"Basic {encoded}"
        if self.token:
            return f"Bearer {self.token}"
        return None


class RequestOptions(BaseModel):
    """Optional parameters collected by the builder for one request."""

    timeout: Optional[float] = Field(default=None, ge=0)
    payload: Optional[bytes] = None
    headers: List[Header] = Field(default_factory=list)
    auth: Auth = Field(default_factory=Auth)
