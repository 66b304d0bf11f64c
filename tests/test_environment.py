"""
Tests for locale, timezone and user-agent lookups.
"""

import pytest

from simple_analytics import environment
from simple_analytics.errors import UserAgentResolutionFailed
from simple_analytics.user_agent import CachedUserAgent, platform_user_agent


class TestCurrentLanguage:
    """Test locale identifier detection."""

    def test_uses_locale_module(self, monkeypatch):
        monkeypatch.setattr(environment.locale, "getlocale", lambda: ("nl_NL", "UTF-8"))
        assert environment.current_language() == "nl_NL"

    def test_falls_back_to_env(self, monkeypatch):
        monkeypatch.setattr(environment.locale, "getlocale", lambda: (None, None))
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.delenv("LC_MESSAGES", raising=False)
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        assert environment.current_language() == "en_US"

    def test_c_locale_is_none(self, monkeypatch):
        monkeypatch.setattr(environment.locale, "getlocale", lambda: ("C", None))
        assert environment.current_language() is None


class TestCurrentTimezone:
    """Test IANA timezone detection."""

    def test_tz_env(self, monkeypatch):
        monkeypatch.setenv("TZ", "Europe/Amsterdam")
        assert environment.current_timezone() == "Europe/Amsterdam"

    def test_tz_env_with_colon(self, monkeypatch):
        monkeypatch.setenv("TZ", ":America/New_York")
        assert environment.current_timezone() == "America/New_York"

    def test_path_in_tz_falls_back_to_system(self, monkeypatch):
        monkeypatch.setenv("TZ", ":/etc/localtime")
        monkeypatch.setattr(environment, "_system_timezone", lambda: "Europe/Berlin")
        assert environment.current_timezone() == "Europe/Berlin"

    def test_posix_rule_falls_back_to_system(self, monkeypatch):
        monkeypatch.setenv("TZ", "EST5EDT,M3.2.0,M11.1.0")
        monkeypatch.setattr(environment, "_system_timezone", lambda: None)
        assert environment.current_timezone() is None

    def test_unknown_zone_is_rejected(self):
        assert environment._valid_zone_name("Mars/Olympus_Mons") is None
        assert environment._valid_zone_name("Europe/Amsterdam") == "Europe/Amsterdam"


class TestUserAgent:
    """Test user-agent resolution and caching."""

    @pytest.mark.asyncio
    async def test_platform_user_agent(self):
        ua = await platform_user_agent()
        assert ua.startswith("python-requests/")
        assert "Python/" in ua

    @pytest.mark.asyncio
    async def test_caches_first_success(self):
        calls = []

        async def resolver():
            calls.append(1)
            return "Agent/1"

        cached = CachedUserAgent(resolver)
        assert await cached.resolve() == "Agent/1"
        assert await cached.resolve() == "Agent/1"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self):
        results = [RuntimeError("engine unavailable"), "Agent/2"]

        async def resolver():
            result = results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        cached = CachedUserAgent(resolver)
        with pytest.raises(UserAgentResolutionFailed):
            await cached.resolve()
        assert await cached.resolve() == "Agent/2"
