from steam_openid.services.steam_profile_service import PlayerSummaries, SteamProfileService

__all__ = ["PlayerSummaries", "SteamProfileService"]
