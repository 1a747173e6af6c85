import os
import ssl
from typing import TYPE_CHECKING, Any, Union

import certifi
import truststore

from .constants import HEADER_USER_AGENT

if TYPE_CHECKING:
    from .._config import Config


def expand_path(path):
    """Expand environment variables and user home directory in path."""
    if not path:
        return path
    # Expand environment variables like $HOME
    path = os.path.expandvars(path)
    # Expand user home directory ~
    path = os.path.expanduser(path)
    return path


def create_ssl_context(use_system_certs: bool = False) -> ssl.SSLContext:
    if use_system_certs:
        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)

    ssl_cert_file = expand_path(os.environ.get("SSL_CERT_FILE"))
    requests_ca_bundle = expand_path(os.environ.get("REQUESTS_CA_BUNDLE"))
    ssl_cert_dir = expand_path(os.environ.get("SSL_CERT_DIR"))

    return ssl.create_default_context(
        cafile=ssl_cert_file or requests_ca_bundle or certifi.where(),
        capath=ssl_cert_dir,
    )


def get_httpx_client_kwargs(config: "Config") -> dict[str, Any]:
    """Keyword arguments for an ``httpx.Client`` honoring ``config``."""
    verify: Union[ssl.SSLContext, bool] = (
        create_ssl_context(config.use_system_certs) if config.verify_ssl else False
    )

    kwargs: dict[str, Any] = {
        "verify": verify,
        "follow_redirects": config.follow_redirects,
        "headers": {HEADER_USER_AGENT: config.user_agent},
    }
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout

    return kwargs
