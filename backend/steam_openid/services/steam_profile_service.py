"""
Steam Web API profile lookup.

Resolves a verified Steam id into the public player summary returned by
ISteamUser/GetPlayerSummaries/v0002.
"""

from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from steam_openid.core.openid.exceptions import DownstreamError

LOG_PREFIX = "[SteamProfile]"

STEAM_API_URL = "https://api.steampowered.com"
PLAYER_SUMMARIES_PATH = "/ISteamUser/GetPlayerSummaries/v0002/"


class PlayerSummaries(BaseModel):
    """Public profile of a Steam account (field names as sent by Steam)."""

    model_config = ConfigDict(extra="ignore")

    steamid: str
    communityvisibilitystate: int = 0
    profilestate: int = 0
    personaname: str = ""
    profileurl: str = ""
    avatar: str = ""
    avatarmedium: str = ""
    avatarfull: str = ""
    lastlogoff: Optional[int] = None
    personastate: int = 0
    realname: Optional[str] = None
    primaryclanid: Optional[str] = None
    timecreated: Optional[int] = None
    loccountrycode: Optional[str] = None
    locstatecode: Optional[str] = None
    loccityid: Optional[int] = None
    gameid: Optional[str] = None
    gameextrainfo: Optional[str] = None
    gameserverip: Optional[str] = None


class SteamProfileService:
    """Steam Web API client for player summaries."""

    def __init__(
        self,
        api_url: str = STEAM_API_URL,
        *,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    async def _get(self, url: str, params: Dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url, params=params)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(url, params=params)

    async def get_player_summaries(self, steam_id: str, api_key: str) -> PlayerSummaries:
        """
        Fetch the player summary for one Steam id.

        Args:
            steam_id: Verified 64-bit Steam id
            api_key: Steam Web API key

        Returns:
            PlayerSummaries of the first (only) player in the response

        Raises:
            DownstreamError: request failed, bad status, bad body or unknown player
        """
        url = f"{self.api_url}{PLAYER_SUMMARIES_PATH}"
        try:
            response = await self._get(url, {"key": api_key, "steamids": steam_id})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"{LOG_PREFIX} GetPlayerSummaries request failed: {e}")
            raise DownstreamError(data={"error_type": type(e).__name__}) from e

        if response.status_code != 200:
            logger.error(f"{LOG_PREFIX} GetPlayerSummaries failed: HTTP {response.status_code}")
            raise DownstreamError(
                f"steam profile lookup failed: HTTP {response.status_code}",
                data={"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"{LOG_PREFIX} GetPlayerSummaries returned a non-JSON body")
            raise DownstreamError("steam profile lookup returned an invalid body") from e

        body = payload.get("response") if isinstance(payload, dict) else None
        players: List[Dict[str, Any]] = (body.get("players") if isinstance(body, dict) else None) or []
        if not players:
            logger.warning(f"{LOG_PREFIX} No player found for steam id {steam_id}")
            raise DownstreamError(f"no steam player found for id {steam_id}")

        try:
            summary = PlayerSummaries.model_validate(players[0])
        except ValidationError as e:
            logger.error(f"{LOG_PREFIX} Unexpected player summary shape: {e}")
            raise DownstreamError("steam profile lookup returned an unexpected player record") from e

        logger.info(f"{LOG_PREFIX} Player summary fetched for {steam_id}")
        return summary
