"""
Steam OpenID login API.

One endpoint serves both steps of the flow:
- GET /v1/auth/steam                      - no openid.mode: redirect to Steam
- GET|POST /v1/auth/steam?openid.mode=... - Steam callback: verify and return the Steam id

Steam calls back on the same URL it was sent in openid.return_to, so the
redirect and the callback share one route.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from loguru import logger

from steam_openid.common.response import error_response, success_response
from steam_openid.core.openid import AuthContext, SteamOpenID, get_provider_config
from steam_openid.core.settings import settings
from steam_openid.services.steam_profile_service import SteamProfileService

LOG_PREFIX = "[SteamAuthAPI]"
CANCEL_MODE = "cancel"

router = APIRouter(prefix="/v1/auth/steam", tags=["Steam OpenID"])


@router.api_route("", methods=["GET", "POST"], response_model=None)
async def steam_login(request: Request) -> RedirectResponse | JSONResponse | Dict[str, Any]:
    """
    Start the Steam login or handle Steam's callback.

    When STEAM_API_KEY is configured the player summary is fetched as well.
    """
    context = await AuthContext.from_request(request)
    openid = SteamOpenID(context, get_provider_config(), timeout=settings.steam_openid_timeout)

    mode = openid.mode
    if not mode:
        auth_url = openid.auth_url(realm_url=settings.steam_realm_url or "")
        logger.info(f"{LOG_PREFIX} Redirecting to Steam login, return_to={context.return_url}")
        return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)

    if mode == CANCEL_MODE:
        logger.info(f"{LOG_PREFIX} Steam login cancelled by user")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=error_response(message="Steam login was cancelled", code=status.HTTP_401_UNAUTHORIZED),
        )

    steam_id = await openid.validate_and_get_id()

    profile: Optional[Dict[str, Any]] = None
    if settings.steam_api_key:
        profile_service = SteamProfileService(settings.steam_api_url, timeout=settings.steam_openid_timeout)
        player = await profile_service.get_player_summaries(steam_id, settings.steam_api_key)
        profile = player.model_dump()

    return success_response(data={"steam_id": steam_id, "profile": profile}, message="Steam login verified")
