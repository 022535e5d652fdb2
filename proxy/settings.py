"""Process configuration for the proxy handlers."""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_USER_AGENT = 'ScottDMiller-Website/1.0'

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """
    Configuration read once at process start.

    Handlers receive a Settings instance at construction and never look up
    environment variables themselves.
    """
    eventbrite_api_token: Optional[str] = None
    brevo_api_key: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = 'INFO'
    allowed_origins: Tuple[str, ...] = ()
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build Settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Settings instance; blank secrets are treated as absent
            and a blank or invalid timeout falls back to the default
        """
        env = os.environ if environ is None else environ

        origins = tuple(
            origin.strip()
            for origin in env.get('CORS_ALLOWED_ORIGINS', '').split(',')
            if origin.strip()
        )

        return cls(
            eventbrite_api_token=_blank_to_none(env.get('EVENTBRITE_API_TOKEN')),
            brevo_api_key=_blank_to_none(env.get('BREVO_API_KEY')),
            timeout_seconds=_parse_timeout(env.get('UPSTREAM_TIMEOUT_SECONDS')),
            log_level=env.get('LOG_LEVEL', 'INFO'),
            allowed_origins=origins,
            user_agent=env.get('EVENTBRITE_USER_AGENT') or DEFAULT_USER_AGENT
        )

    def __repr__(self) -> str:
        return (
            f"Settings(eventbrite_api_token={'***' if self.eventbrite_api_token else None}, "
            f"brevo_api_key={'***' if self.brevo_api_key else None}, "
            f"timeout_seconds={self.timeout_seconds}, log_level={self.log_level!r}, "
            f"allowed_origins={self.allowed_origins!r})"
        )


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_timeout(value: Optional[str]) -> float:
    value = _blank_to_none(value)
    if value is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(value)
    except ValueError:
        timeout = 0
    if not timeout > 0:
        logger.warning(
            f"Invalid UPSTREAM_TIMEOUT_SECONDS {value!r}; "
            f"using {DEFAULT_TIMEOUT_SECONDS} seconds"
        )
        return DEFAULT_TIMEOUT_SECONDS
    return timeout
