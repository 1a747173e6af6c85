import socket
import sys
import threading
from pathlib import Path
from typing import Generator

import pytest

# Ensure local source package (src/apifast) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from apifast import Config  # noqa: E402

_PROXY_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "APIFAST_TIMEOUT",
        "APIFAST_VERIFY_SSL",
        "APIFAST_FOLLOW_REDIRECTS",
        "APIFAST_USER_AGENT",
        "APIFAST_USE_SYSTEM_CERTS",
        "APIFAST_DEBUG",
        *_PROXY_VARS,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com"


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def silent_server() -> Generator[str, None, None]:
    """A local listener that accepts connections but never answers."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen(8)
        host, port = sock.getsockname()
        yield f"http://{host}:{port}"


@pytest.fixture
def closed_port_url() -> str:
    """A local URL with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        host, port = sock.getsockname()
    return f"http://{host}:{port}"


@pytest.fixture
def trickling_server() -> Generator[str, None, None]:
    """A local server that answers promptly but sends its body one byte every 30ms."""
    stop = threading.Event()
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(8)
    sock.settimeout(0.1)
    host, port = sock.getsockname()

    def serve() -> None:
        while not stop.is_set():
            try:
                conn, _ = sock.accept()
            except OSError:
                continue
            with conn:
                try:
                    conn.recv(65536)
                    conn.sendall(
                        b"HTTP/1.1 200 OK\r\n"
                        b"Content-Type: text/plain\r\n"
                        b"Content-Length: 20\r\n\r\n"
                    )
                    for _ in range(20):
                        if stop.wait(0.03):
                            break
                        conn.sendall(b"x")
                except OSError:
                    pass

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield f"http://{host}:{port}"
    finally:
        stop.set()
        thread.join(timeout=2)
        sock.close()
