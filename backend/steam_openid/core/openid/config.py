"""
Steam OpenID provider parameters.

The provider endpoint, namespace and identifier-select constants live in one
immutable object. A process-wide instance is built lazily from settings;
tests and alternative deployments build their own and pass it in.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from loguru import logger

LOG_PREFIX = "[OpenIDConfig]"

STEAM_LOGIN_URL = "https://steamcommunity.com/openid/login"
OPENID_NS = "http://specs.openid.net/auth/2.0"
OPENID_IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"
OPENID_CHECKID_MODE = "checkid_setup"
STEAM_CLAIMED_ID_HOSTS: Tuple[str, ...] = ("steamcommunity.com",)


def build_claimed_id_pattern(hosts: Sequence[str]) -> re.Pattern[str]:
    """Compile the claimed_id shape check for the given provider hosts."""
    host_group = "|".join(re.escape(host) for host in hosts)
    return re.compile(rf"(http|https)://({host_group})/openid/id/[0-9]{{15,25}}")


@dataclass(frozen=True)
class OpenIDProviderConfig:
    """Immutable OpenID 2.0 provider parameters."""

    login_url: str = STEAM_LOGIN_URL
    namespace: str = OPENID_NS
    identifier_select: str = OPENID_IDENTIFIER_SELECT
    checkid_mode: str = OPENID_CHECKID_MODE
    claimed_id_hosts: Tuple[str, ...] = STEAM_CLAIMED_ID_HOSTS
    claimed_id_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.claimed_id_hosts:
            raise ValueError("claimed_id_hosts must name at least one host")
        # frozen: derived fields go through object.__setattr__
        object.__setattr__(self, "claimed_id_hosts", tuple(self.claimed_id_hosts))
        object.__setattr__(self, "claimed_id_pattern", build_claimed_id_pattern(self.claimed_id_hosts))

    def is_valid_claimed_id(self, claimed_id: str) -> bool:
        """Full match only; a trailing newline is rejected."""
        return self.claimed_id_pattern.fullmatch(claimed_id) is not None


STEAM_PROVIDER = OpenIDProviderConfig()

# Global provider config (lazy init)
_provider_config: Optional[OpenIDProviderConfig] = None


def get_provider_config() -> OpenIDProviderConfig:
    """Get the process-wide provider config built from settings."""
    global _provider_config
    if _provider_config is None:
        from steam_openid.core.settings import settings

        _provider_config = OpenIDProviderConfig(
            login_url=settings.steam_openid_login_url,
            claimed_id_hosts=tuple(settings.steam_openid_claimed_id_hosts),
        )
        logger.info(
            f"{LOG_PREFIX} Provider configured: login_url={_provider_config.login_url}, "
            f"claimed_id_hosts={','.join(_provider_config.claimed_id_hosts)}"
        )
    return _provider_config
