from ._logs import setup_logging
from ._mapper import map_result
from ._ssl_context import get_httpx_client_kwargs

__all__ = [
    "get_httpx_client_kwargs",
    "map_result",
    "setup_logging",
]
