import logging
from typing import Callable, Optional
from supabase import create_client, Client, ClientOptions
from audit_manager.config import settings

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Client]


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared anon client. Never signed in; used for token checks only."""
        if cls._client is None:
            settings.require_supabase_credentials()
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
            logger.info("Supabase client created for %s", settings.supabase_url)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Falls back to the public client."""
        if cls._service_client is None and settings.supabase_service_role_key:
            settings.require_supabase_credentials()
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def create_isolated_client(cls, access_token: Optional[str] = None) -> Client:
        """Unshared anon client, optionally acting as the holder of access_token.

        A sign-in rebinds the client it runs on to the new session, so
        sign-in/sign-up and per-user table calls each get one of these.
        """
        settings.require_supabase_credentials()
        options = ClientOptions(auto_refresh_token=False, persist_session=False)
        if access_token:
            options.headers["Authorization"] = f"Bearer {access_token}"
        return create_client(settings.supabase_url, settings.supabase_key, options)

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_admin_supabase() -> Optional[Client]:
    """Service-role client, or None when no service key is configured."""
    if not settings.supabase_service_role_key:
        return None
    return SupabaseClient.get_service_client()


def get_client_factory() -> ClientFactory:
    """Builds a fresh client per call: factory() is anonymous, factory(token) acts as that user."""
    return SupabaseClient.create_isolated_client
