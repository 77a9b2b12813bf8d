import dataclasses

import pytest

from steam_openid.core import settings as settings_module
from steam_openid.core.openid import STEAM_PROVIDER, OpenIDProviderConfig, SteamOpenID, get_provider_config
from steam_openid.core.openid import config as openid_config
from steam_openid.core.settings import Settings


def test_steam_defaults():
    assert STEAM_PROVIDER.login_url == "https://steamcommunity.com/openid/login"
    assert STEAM_PROVIDER.namespace == "http://specs.openid.net/auth/2.0"
    assert STEAM_PROVIDER.identifier_select == "http://specs.openid.net/auth/2.0/identifier_select"
    assert STEAM_PROVIDER.checkid_mode == "checkid_setup"
    assert STEAM_PROVIDER.claimed_id_hosts == ("steamcommunity.com",)


def test_provider_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        STEAM_PROVIDER.login_url = "http://127.0.0.1/openid/login"  # type: ignore[misc]


def test_hosts_are_required():
    with pytest.raises(ValueError):
        OpenIDProviderConfig(claimed_id_hosts=())


def test_hosts_are_matched_literally():
    provider = OpenIDProviderConfig(claimed_id_hosts=["steam.example.net"])

    assert provider.claimed_id_hosts == ("steam.example.net",)
    assert provider.is_valid_claimed_id("https://steam.example.net/openid/id/76561198000000000")
    assert not provider.is_valid_claimed_id("https://steamXexample.net/openid/id/76561198000000000")


def test_process_wide_config_is_built_once():
    first = get_provider_config()

    assert get_provider_config() is first
    assert first.login_url == "https://steamcommunity.com/openid/login"


@pytest.mark.asyncio
async def test_process_wide_config_follows_settings(monkeypatch, context_for, callback_params, provider):
    monkeypatch.setenv("STEAM_OPENID_CLAIMED_ID_HOSTS", "steamcommunity.com, steam.example.net")
    monkeypatch.setenv("STEAM_OPENID_LOGIN_URL", "http://127.0.0.1:9000/openid/login")
    monkeypatch.setattr(settings_module, "settings", Settings())
    monkeypatch.setattr(openid_config, "_provider_config", None)

    provider_config = get_provider_config()

    assert provider_config.claimed_id_hosts == ("steamcommunity.com", "steam.example.net")
    assert provider_config.login_url == "http://127.0.0.1:9000/openid/login"

    claimed_id = "https://steam.example.net/openid/id/76561198000000000"
    context = context_for(callback_params(claimed_id=claimed_id, identity=claimed_id))
    async with provider.client() as client:
        steam_id = await SteamOpenID(context, http_client=client).validate_and_get_id()

    assert steam_id == "76561198000000000"
    assert str(provider.requests[0].url) == "http://127.0.0.1:9000/openid/login"
