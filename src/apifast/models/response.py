from dataclasses import dataclass, field
from typing import Any

from httpx import Headers


@dataclass(frozen=True)
class Response:
    """Outcome of a dispatched request.

    Attributes:
        code: HTTP status code.
        msg: Status line, e.g. ``"HTTP/1.1 200 OK"``.
        body: Raw response body, fully read.
        headers: Response headers as returned by the transport.
        result: The decoded destination when one was supplied to the
            builder, otherwise None.
    """

    code: int
    msg: str
    body: bytes
    headers: Headers = field(default_factory=Headers)
    result: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 400

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
