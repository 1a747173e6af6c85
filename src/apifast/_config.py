from os import environ as env
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from ._utils.constants import (
    DEFAULT_USER_AGENT,
    ENV_DEBUG,
    ENV_FOLLOW_REDIRECTS,
    ENV_TIMEOUT,
    ENV_USE_SYSTEM_CERTS,
    ENV_USER_AGENT,
    ENV_VERIFY_SSL,
)

load_dotenv(override=False)

_FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() not in _FALSY


class Config(BaseModel):
    """Transport defaults shared by every builder created from it.

    A timeout set on the builder always wins over ``timeout`` here; when
    neither is set the request falls back to httpx's own default.
    """

    timeout: Optional[float] = Field(default=None, ge=0)
    verify_ssl: bool = True
    follow_redirects: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    use_system_certs: bool = False
    debug: bool = False

    @field_validator("timeout")
    @classmethod
    def _zero_means_unset(cls, value: Optional[float]) -> Optional[float]:
        return value or None

    @classmethod
    def from_env(cls) -> "Config":
        """Build a configuration from ``APIFAST_*`` environment variables.

        A ``.env`` file is read once, when this module is imported, without
        overriding variables that are already set.
        """
        return cls(
            timeout=env.get(ENV_TIMEOUT) or None,  # type: ignore[arg-type]
            verify_ssl=_env_flag(ENV_VERIFY_SSL, True),
            follow_redirects=_env_flag(ENV_FOLLOW_REDIRECTS, False),
            user_agent=env.get(ENV_USER_AGENT) or DEFAULT_USER_AGENT,
            use_system_certs=_env_flag(ENV_USE_SYSTEM_CERTS, False),
            debug=_env_flag(ENV_DEBUG, False),
        )
