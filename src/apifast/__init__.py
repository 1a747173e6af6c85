"""Fluent builder for one-shot HTTP requests with JSON result decoding.

Example:
    ```python
    import apifast
    from apifast import Auth

    response = (
        apifast.build()
        .uri("https://api.example.com/items")
        .auth(Auth.bearer("secret"))
        .payload(b'{"name": "foo"}')
        .post()
    )
    ```
"""

from ._builder import FastBuilder, build
from ._config import Config
from ._utils._logs import setup_logging
from ._utils.constants import APIFAST_VERSION as __version__
from .models import (
    ApiFastError,
    Auth,
    BuilderConsumedError,
    DecodeError,
    Header,
    HeaderValue,
    RequestOptions,
    RequestTimeoutError,
    Response,
    TransportError,
)

__all__ = [
    "ApiFastError",
    "Auth",
    "BuilderConsumedError",
    "Config",
    "DecodeError",
    "FastBuilder",
    "Header",
    "HeaderValue",
    "RequestOptions",
    "RequestTimeoutError",
    "Response",
    "TransportError",
    "__version__",
    "build",
    "setup_logging",
]
