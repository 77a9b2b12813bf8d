"""
Steam OpenID 2.0 module.

Module layout:
- config.py: immutable provider parameters (OpenIDProviderConfig, get_provider_config)
- context.py: per-request AuthContext
- protocol.py: SteamOpenID (login redirect builder + callback validator)
- response.py: check_authentication response parser
- exceptions.py: classified validation errors
"""

from steam_openid.core.openid.config import STEAM_PROVIDER, OpenIDProviderConfig, get_provider_config
from steam_openid.core.openid.context import AuthContext, strip_openid_params
from steam_openid.core.openid.exceptions import (
    AssertionInvalidError,
    DownstreamError,
    InvalidModeError,
    MalformedClaimedIdError,
    MalformedSignedListError,
    NamespaceMismatchError,
    OpenIDErrorKind,
    ReturnUrlMismatchError,
    SteamOpenIDError,
    TransportError,
)
from steam_openid.core.openid.protocol import SteamOpenID, normalize_claimed_id
from steam_openid.core.openid.response import CheckAuthenticationResult, parse_check_authentication

__all__ = [
    "STEAM_PROVIDER",
    "OpenIDProviderConfig",
    "get_provider_config",
    "AuthContext",
    "strip_openid_params",
    "SteamOpenID",
    "normalize_claimed_id",
    "CheckAuthenticationResult",
    "parse_check_authentication",
    "OpenIDErrorKind",
    "SteamOpenIDError",
    "InvalidModeError",
    "ReturnUrlMismatchError",
    "TransportError",
    "NamespaceMismatchError",
    "AssertionInvalidError",
    "MalformedClaimedIdError",
    "MalformedSignedListError",
    "DownstreamError",
]
