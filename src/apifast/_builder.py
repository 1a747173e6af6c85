import time
from datetime import timedelta
from logging import getLogger
from typing import Any, Mapping, Optional, Sequence, Union

from httpx import (
    USE_CLIENT_DEFAULT,
    Client,
    Headers,
    HTTPError,
    InvalidURL,
    TimeoutException,
)
from httpx import Response as HTTPXResponse

from ._config import Config
from ._utils._logs import setup_logging
from ._utils._mapper import is_supported_destination, map_result
from ._utils._ssl_context import get_httpx_client_kwargs
from ._utils.constants import (
    HEADER_AUTHORIZATION,
    MASKED_VALUE,
    METHOD_DELETE,
    METHOD_GET,
    METHOD_PATCH,
    METHOD_POST,
)
from .models import (
    Auth,
    BuilderConsumedError,
    Header,
    HeaderValue,
    RequestOptions,
    RequestTimeoutError,
    Response,
    TransportError,
)


class FastBuilder:
    """Fluent builder for a single HTTP request.

    Every setter returns the builder itself so calls can be chained; one of
    the terminal verbs (:meth:`get`, :meth:`post`, :meth:`patch`,
    :meth:`delete`) then performs the request synchronously and returns a
    :class:`Response`.

    A builder is single-use and must not be shared between threads. After
    the terminal call, further setters or verbs raise
    :class:`BuilderConsumedError`; create a new builder with ``build()``
    instead.

    Example:
        ```python
        response = (
            apifast.build()
            .uri("https://api.example.com/users/1")
            .auth(Auth.bearer(token))
            .timeout(2.5)
            .result(User)
            .get()
        )
        user = response.result
        ```
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self._logger = getLogger("apifast")
        self._config = config or Config()
        self._method = ""
        self._url = ""
        self._options = RequestOptions()
        self._result: Any = None
        self._client: Optional[Client] = None
        self._consumed = False

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> str:
        return self._url

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def consumed(self) -> bool:
        return self._consumed

    def uri(self, url: str) -> "FastBuilder":
        """Set the request URL."""
        self._ensure_unused()
        self._url = url
        return self

    def timeout(self, timeout: Union[float, timedelta, None]) -> "FastBuilder":
        """Set the request timeout, in seconds or as a timedelta.

        Zero or None clears it, leaving the transport defaults in charge.

        Raises:
            ValueError: If the timeout is negative.
        """
        self._ensure_unused()
        if isinstance(timeout, timedelta):
            timeout = timeout.total_seconds()
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must not be negative, got {timeout}")
        self._options.timeout = timeout or None
        return self

    def auth(self, auth: Auth) -> "FastBuilder":
        """Set Basic or Bearer credentials."""
        self._ensure_unused()
        self._options.auth = auth
        return self

    def headers(
        self, headers: Union[Sequence[Header], Mapping[str, HeaderValue]]
    ) -> "FastBuilder":
        """Replace the custom headers; they are applied in the given order."""
        self._ensure_unused()
        if isinstance(headers, Mapping):
            headers = [Header(tag=tag, value=value) for tag, value in headers.items()]
        headers = list(headers)
        for header in headers:
            if not isinstance(header, Header):
                raise TypeError(f"expected Header, got {type(header).__name__}")
        self._options.headers = headers
        return self

    def payload(self, payload: Union[bytes, str, None]) -> "FastBuilder":
        """Set the request body. Strings are sent UTF-8 encoded."""
        self._ensure_unused()
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self._options.payload = payload
        return self

    def result(self, destination: Any) -> "FastBuilder":
        """Decode the JSON response body into ``destination``.

        ``destination`` is either a type (a pydantic model, a dataclass, a
        typing alias such as ``list[Item]``), decoded into a new value, or a
        ``dict``, ``list`` or pydantic model instance filled in place. The
        decoded value is exposed as ``Response.result``.

        Raises:
            TypeError: If ``destination`` cannot receive a decoded body.
        """
        self._ensure_unused()
        if destination is not None and not is_supported_destination(destination):
            raise TypeError(
                f"unsupported result destination: {type(destination).__name__}"
            )
        self._result = destination
        return self

    def client(self, client: Client) -> "FastBuilder":
        """Dispatch through ``client`` instead of a per-request client.

        The caller keeps ownership; the builder never closes it.
        """
        self._ensure_unused()
        self._client = client
        return self

    def get(self) -> Response:
        """Perform a GET request."""
        return self._make_request(METHOD_GET)

    def post(self) -> Response:
        """Perform a POST request."""
        return self._make_request(METHOD_POST)

    def patch(self) -> Response:
        """Perform a PATCH request."""
        return self._make_request(METHOD_PATCH)

    def delete(self) -> Response:
        """Perform a DELETE request."""
        return self._make_request(METHOD_DELETE)

    def _ensure_unused(self) -> None:
        if self._consumed:
            raise BuilderConsumedError()

    def _make_request(self, method: str) -> Response:
        self._ensure_unused()
        self._consumed = True
        self._method = method

        if self._client is not None:
            return self._send(self._client)

        with Client(**get_httpx_client_kwargs(self._config)) as client:
            return self._send(client)

    def _request_headers(self) -> Headers:
        # keyed by lowercase name so later duplicates replace earlier ones
        applied: dict[str, tuple[str, Union[str, bytes]]] = {}
        for header in self._options.headers:
            applied[header.tag.lower()] = (header.tag, header.rendered())

        authorization = self._options.auth.authorization()
        if authorization is not None:
            applied[HEADER_AUTHORIZATION.lower()] = (HEADER_AUTHORIZATION, authorization)

        return Headers(list(applied.values()))

    def _read_body(
        self, response: HTTPXResponse, deadline: Optional[float]
    ) -> bytes:
        # total deadline; httpx only bounds each connect/read/write phase
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if deadline is not None and time.monotonic() > deadline:
                break
        if deadline is not None and time.monotonic() > deadline:
            self._logger.debug(
                f"Request exceeded its deadline: {self._method} {self._url}"
            )
            raise RequestTimeoutError()
        return b"".join(chunks)

    def _send(self, client: Client) -> Response:
        timeout = self._options.timeout or self._config.timeout
        deadline = time.monotonic() + timeout if timeout is not None else None

        self._logger.debug(f"Request: {self._method} {self._url}")

        try:
            headers = self._request_headers()
            self._logger.debug(f"HEADERS: {_masked(headers)}")

            request = client.build_request(
                self._method,
                self._url,
                headers=headers,
                content=self._options.payload,
                timeout=timeout if timeout is not None else USE_CLIENT_DEFAULT,
            )
            response = client.send(request, stream=True)
            try:
                body = self._read_body(response, deadline)
            finally:
                response.close()
        except TimeoutException as e:
            self._logger.debug(f"Request timed out: {self._method} {self._url}")
            raise RequestTimeoutError() from e
        except (HTTPError, InvalidURL, UnicodeEncodeError) as e:
            raise TransportError(str(e) or type(e).__name__) from e

        self._logger.debug(
            f"Response: {response.status_code} {response.reason_phrase} "
            f"({len(body)} bytes)"
        )

        result = None
        if self._result is not None:
            result = map_result(body, self._result)

        return Response(
            code=response.status_code,
            msg=f"{response.http_version} {response.status_code} {response.reason_phrase}",
            body=body,
            headers=response.headers,
            result=result,
        )


def _masked(headers: Headers) -> dict[str, str]:
    return {
        name: MASKED_VALUE if name.lower() == HEADER_AUTHORIZATION.lower() else value
        for name, value in headers.items()
    }


def build(config: Optional[Config] = None) -> FastBuilder:
    """Create a new request builder.

    Args:
        config: Transport defaults. Read from ``APIFAST_*`` environment
            variables when omitted.
    """
    config = config or Config.from_env()
    if config.debug:
        setup_logging(should_debug=True)
    return FastBuilder(config)
