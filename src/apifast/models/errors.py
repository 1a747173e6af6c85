from typing import Optional


class ApiFastError(Exception):
    """Base class for every error raised while dispatching a request."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class RequestTimeoutError(ApiFastError, TimeoutError):
    """The configured timeout elapsed before a response was obtained."""

    def __init__(self, message: str = "request timed out"):
        super().__init__(message)


class TransportError(ApiFastError):
    """Any non-timeout failure reported by the transport (DNS, refused, TLS...)."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"request failed: {cause}")


class DecodeError(ApiFastError, ValueError):
    """The response body could not be decoded into the result destination."""

    def __init__(self, message: str, body: Optional[bytes] = None):
        self.body = body
        super().__init__(message)


class BuilderConsumedError(ApiFastError, RuntimeError):
    """A builder was reused after its terminal call."""

    def __init__(
        self,
        message: str = "builder already dispatched a request; call build() for a new one",
    ):
        super().__init__(message)
