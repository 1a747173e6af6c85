from .errors import (
    ApiFastError,
    BuilderConsumedError,
    DecodeError,
    RequestTimeoutError,
    TransportError,
)
from .request import Auth, Header, HeaderValue, RequestOptions
from .response import Response

__all__ = [
    "ApiFastError",
    "Auth",
    "BuilderConsumedError",
    "DecodeError",
    "Header",
    "HeaderValue",
    "RequestOptions",
    "RequestTimeoutError",
    "Response",
    "TransportError",
]
