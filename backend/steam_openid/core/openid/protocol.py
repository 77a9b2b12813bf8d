"""
Steam OpenID 2.0 protocol handler.

Steam only speaks the indirect OpenID 2.0 flow:
1. Redirect the browser to the Steam login page (checkid_setup)
2. Steam redirects back with a signed id_res assertion
3. Re-submit the signed fields to Steam (check_authentication) and
   only trust the assertion when Steam answers is_valid:true
4. Extract the 64-bit Steam id from openid.claimed_id
"""

import re
from typing import TYPE_CHECKING, Dict, List, Optional
from urllib.parse import urlencode

import httpx
from loguru import logger

from steam_openid.core.openid.config import OpenIDProviderConfig, get_provider_config
from steam_openid.core.openid.context import AuthContext
from steam_openid.core.openid.exceptions import (
    AssertionInvalidError,
    InvalidModeError,
    MalformedClaimedIdError,
    MalformedSignedListError,
    NamespaceMismatchError,
    ReturnUrlMismatchError,
    TransportError,
)
from steam_openid.core.openid.response import parse_check_authentication

if TYPE_CHECKING:
    from steam_openid.services.steam_profile_service import PlayerSummaries, SteamProfileService

LOG_PREFIX = "[SteamOpenID]"

ID_RES_MODE = "id_res"
CHECK_AUTHENTICATION_MODE = "check_authentication"
DEFAULT_TIMEOUT = 10.0

# Fields always copied into the check_authentication request
CHECK_AUTH_BASE_FIELDS = ("assoc_handle", "signed", "sig", "ns")

_SIGNED_FIELD_RE = re.compile(r"[A-Za-z0-9_.]+")
_NON_DIGITS_RE = re.compile(r"\D+")


def normalize_claimed_id(claimed_id: str) -> str:
    """Strip everything but the digits of a claimed_id URL."""
    return _NON_DIGITS_RE.sub("", claimed_id)


def parse_signed_fields(signed: str) -> List[str]:
    """
    Split openid.signed into field names.

    Raises:
        MalformedSignedListError: empty list or a name that is not a plain identifier
    """
    if not signed:
        raise MalformedSignedListError("openid.signed is missing")
    names = signed.split(",")
    for name in names:
        if not _SIGNED_FIELD_RE.fullmatch(name):
            raise MalformedSignedListError(data={"field": name})
    return names


class SteamOpenID:
    """
    Builds the Steam login redirect and validates the callback for one request.

    Usage:
        context = await AuthContext.from_request(request)
        openid = SteamOpenID(context)
        if not openid.mode:
            return RedirectResponse(openid.auth_url())
        steam_id = await openid.validate_and_get_id()
    """

    def __init__(
        self,
        context: AuthContext,
        provider: Optional[OpenIDProviderConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.context = context
        self.provider = provider or get_provider_config()
        self._http_client = http_client
        self._timeout = timeout

    @property
    def mode(self) -> str:
        """openid.mode of the current request; empty on the initial visit."""
        return self.context.get("openid.mode")

    def auth_url(self, return_url: str = "", realm_url: str = "") -> str:
        """
        Build the Steam login URL.

        Args:
            return_url: Callback URL; defaults to the current request URL
            realm_url: Trust root shown to the user; defaults to the request root

        Returns:
            Provider login URL with sorted, URL-encoded openid.* parameters
        """
        params = {
            "openid.claimed_id": self.provider.identifier_select,
            "openid.identity": self.provider.identifier_select,
            "openid.mode": self.provider.checkid_mode,
            "openid.ns": self.provider.namespace,
            "openid.realm": realm_url or self.context.root,
            "openid.return_to": return_url or self.context.return_url,
        }
        return f"{self.provider.login_url}?{urlencode(sorted(params.items()))}"

    def build_check_params(self) -> Dict[str, str]:
        """Copy the signed assertion into a check_authentication request."""
        params: Dict[str, str] = {}
        for name in CHECK_AUTH_BASE_FIELDS:
            params[f"openid.{name}"] = self.context.get(f"openid.{name}")
        for name in parse_signed_fields(self.context.get("openid.signed")):
            params[f"openid.{name}"] = self.context.get(f"openid.{name}")
        # Must come last: "mode" is usually in the signed list
        params["openid.mode"] = CHECK_AUTHENTICATION_MODE
        return params

    async def _post_check_authentication(self, params: Dict[str, str]) -> str:
        """POST the check request and return the fully read body."""
        try:
            if self._http_client is not None:
                response = await self._http_client.post(self.provider.login_url, data=params)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self.provider.login_url, data=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"{LOG_PREFIX} check_authentication request failed: {e}")
            raise TransportError(original_error=e) from e

        if response.status_code != 200:
            logger.warning(f"{LOG_PREFIX} check_authentication answered HTTP {response.status_code}")
        return response.text

    async def validate_and_get_id(self) -> str:
        """
        Validate the callback and return the verified Steam id.

        Returns:
            Steam id (digits of openid.claimed_id)

        Raises:
            InvalidModeError: openid.mode is not id_res
            ReturnUrlMismatchError: openid.return_to differs from the current URL
            MalformedSignedListError: openid.signed is unusable
            TransportError: Steam could not be reached
            NamespaceMismatchError: response line 0 is not the OpenID 2.0 ns
            AssertionInvalidError: Steam reports is_valid:false
            MalformedClaimedIdError: claimed_id is not a Steam id URL
        """
        mode = self.mode
        if mode != ID_RES_MODE:
            logger.warning(f"{LOG_PREFIX} Rejected callback: mode={mode!r}")
            raise InvalidModeError()

        return_to = self.context.get("openid.return_to")
        if return_to != self.context.return_url:
            logger.warning(
                f"{LOG_PREFIX} Rejected callback: return_to={return_to!r} expected={self.context.return_url!r}"
            )
            raise ReturnUrlMismatchError()

        params = self.build_check_params()
        body = await self._post_check_authentication(params)

        result = parse_check_authentication(body, self.provider.namespace)
        if not result.namespace_ok:
            logger.warning(f"{LOG_PREFIX} Rejected callback: unexpected ns line {result.namespace_line!r}")
            raise NamespaceMismatchError()
        if not result.is_valid:
            logger.warning(f"{LOG_PREFIX} Rejected callback: provider reported {result.validity_line!r}")
            raise AssertionInvalidError()

        claimed_id = self.context.get("openid.claimed_id")
        if not self.provider.is_valid_claimed_id(claimed_id):
            logger.warning(f"{LOG_PREFIX} Rejected callback: claimed_id={claimed_id!r}")
            raise MalformedClaimedIdError()

        steam_id = normalize_claimed_id(claimed_id)
        logger.info(f"{LOG_PREFIX} Verified steam id {steam_id}")
        return steam_id

    async def validate_and_get_user(
        self,
        api_key: str,
        profile_service: Optional["SteamProfileService"] = None,
    ) -> "PlayerSummaries":
        """
        Validate the callback, then look the player up on the Steam Web API.

        Profile lookup errors (DownstreamError) propagate unchanged.
        """
        steam_id = await self.validate_and_get_id()
        if profile_service is None:
            from steam_openid.services.steam_profile_service import SteamProfileService

            profile_service = SteamProfileService(timeout=self._timeout)
        return await profile_service.get_player_summaries(steam_id, api_key)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} root={self.context.root} mode={self.mode or '-'}>"
