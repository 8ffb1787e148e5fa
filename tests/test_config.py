"""Tests for settings and store-client configuration."""

import pytest

from audit_manager.config.settings import Settings
from audit_manager.core.errors import ConfigError


class TestRequireSupabaseCredentials:
    def test_missing_both(self) -> None:
        settings = Settings(supabase_url="", supabase_key="", _env_file=None)
        with pytest.raises(ConfigError) as exc_info:
            settings.require_supabase_credentials()
        assert "SUPABASE_URL" in exc_info.value.message
        assert "SUPABASE_KEY" in exc_info.value.message

    def test_missing_key_only(self) -> None:
        settings = Settings(supabase_url="http://localhost:54321", supabase_key=" ", _env_file=None)
        with pytest.raises(ConfigError, match="SUPABASE_KEY"):
            settings.require_supabase_credentials()

    def test_present(self) -> None:
        settings = Settings(supabase_url="http://localhost:54321", supabase_key="anon", _env_file=None)
        settings.require_supabase_credentials()


class TestCorsOrigins:
    def test_split_and_trim(self) -> None:
        settings = Settings(cors_origins=" http://a.test , ,http://b.test", _env_file=None)
        assert settings.get_cors_origins_list() == ["http://a.test", "http://b.test"]


class TestClientFactory:
    def test_client_factory_refuses_without_credentials(self, monkeypatch) -> None:
        from audit_manager.database import supabase_client

        monkeypatch.setattr(supabase_client.settings, "supabase_url", "")
        supabase_client.SupabaseClient.reset_client()
        try:
            with pytest.raises(ConfigError):
                supabase_client.get_supabase()
        finally:
            supabase_client.SupabaseClient.reset_client()

    def test_no_admin_client_without_service_key(self, monkeypatch) -> None:
        from audit_manager.database import supabase_client

        monkeypatch.setattr(supabase_client.settings, "supabase_service_role_key", None)
        assert supabase_client.get_admin_supabase() is None

    def test_isolated_client_refuses_without_credentials(self, monkeypatch) -> None:
        from audit_manager.database import supabase_client

        monkeypatch.setattr(supabase_client.settings, "supabase_key", "")
        with pytest.raises(ConfigError):
            supabase_client.get_client_factory()("some-token")
