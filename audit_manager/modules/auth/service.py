import asyncio
import hashlib
import logging
import time
from supabase import Client
from audit_manager.core.enums import Role
from audit_manager.core.errors import AuthError, ConsistencyGap, DataAccessError
from audit_manager.database.repository import error_message
from audit_manager.modules.profiles.service import ProfileService
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


def forget_token(token: str):
    _AUTH_USER_CACHE.pop(_cache_key(token), None)


class AuthService:
    """Identity operations against Supabase Auth plus the profile row each identity needs.

    With a client_factory, sign-in and sign-up run on a fresh client each
    time, so the shared client passed as ``supabase`` never holds a user
    session. Without one (SessionManager) the service signs in on
    ``supabase`` itself.
    """

    def __init__(
        self,
        supabase: Client,
        admin_client: Optional[Client] = None,
        client_factory: Optional[Callable[..., Client]] = None,
    ):
        self.supabase = supabase
        self.admin_client = admin_client
        self.client_factory = client_factory

    def _session_client(self) -> Client:
        if self.client_factory is None:
            return self.supabase
        return self.client_factory()

    async def sign_in(self, email: str, password: str):
        """Authenticate with email + password; returns the auth response (user, session)"""
        client = self._session_client()
        try:
            auth_response = await asyncio.to_thread(
                client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except Exception as e:
            error_msg = error_message(e)
            lowered = error_msg.lower()
            if "invalid" in lowered or "credentials" in lowered:
                raise AuthError("Invalid email or password") from e
            raise AuthError(f"Login failed: {error_msg}") from e

        if not auth_response.user or not auth_response.session:
            raise AuthError("Invalid email or password")
        return auth_response

    async def sign_up(self, email: str, password: str, full_name: str, role: Role = Role.TEAM):
        """Create an identity, then its profile row.

        If the profile insert fails the identity is deleted again with the
        service-role client; without one the half-created account is
        reported as ConsistencyGap.
        """
        client = self._session_client()
        try:
            auth_response = await asyncio.to_thread(
                client.auth.sign_up,
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": full_name}},
                },
            )
        except Exception as e:
            raise self._registration_error(e) from e

        if not auth_response.user:
            raise AuthError("Failed to register user", status_code=400)

        # the new session (if any) is bound to client, so the insert runs as the new user
        await self._create_profile_or_rollback(
            client, auth_response.user.id, email, full_name, role,
            signed_in=auth_response.session is not None,
        )
        return auth_response

    async def create_user(self, email: str, password: str, full_name: str, role: Role = Role.TEAM):
        """Admin-side account creation; does not touch the caller's own session when a service key is set"""
        if self.admin_client is None:
            response = await self.sign_up(email, password, full_name, role)
            return response.user
        try:
            response = await asyncio.to_thread(
                self.admin_client.auth.admin.create_user,
                {
                    "email": email,
                    "password": password,
                    "email_confirm": True,
                    "user_metadata": {"full_name": full_name},
                },
            )
        except Exception as e:
            raise self._registration_error(e) from e
        if not response.user:
            raise AuthError("Failed to create user", status_code=400)
        await self._create_profile_or_rollback(self.admin_client, response.user.id, email, full_name, role)
        return response.user

    async def _create_profile_or_rollback(
        self, client: Client, user_id: str, email: str, full_name: str, role: Role, signed_in: bool = False
    ):
        try:
            await ProfileService(client).create_profile(user_id, email, full_name, role)
        except DataAccessError as e:
            await self._rollback_identity(client, user_id, email, e, signed_in)

    async def _rollback_identity(self, client: Client, user_id: str, email: str, cause: DataAccessError, signed_in: bool):
        if self.admin_client is None:
            logger.error(f"Profile insert failed for {email} ({user_id}) and no service key is configured to roll back: {cause}")
            raise ConsistencyGap(
                f"Account {email} was created but its profile could not be saved: {cause.message}",
                identity_id=user_id,
            ) from cause
        try:
            await asyncio.to_thread(self.admin_client.auth.admin.delete_user, user_id)
        except Exception as e:
            logger.error(f"Rollback of identity {user_id} failed: {e}")
            raise ConsistencyGap(
                f"Account {email} was created but its profile could not be saved: {cause.message}",
                identity_id=user_id,
            ) from e
        logger.warning(f"Rolled back identity {user_id} after profile insert failure: {cause}")
        if signed_in:
            await self._sign_out(client)
        raise DataAccessError(f"Registration failed: {cause.message}", table="profiles") from cause

    @staticmethod
    def _registration_error(exc: Exception) -> AuthError:
        error_msg = error_message(exc)
        lowered = error_msg.lower()
        if "already registered" in lowered or "already exists" in lowered:
            return AuthError("User already exists", status_code=400)
        return AuthError(f"Registration failed: {error_msg}", status_code=400)

    @staticmethod
    async def _sign_out(client: Client) -> bool:
        try:
            await asyncio.to_thread(client.auth.sign_out)
            return True
        except Exception as e:
            logger.error(f"Sign-out failed: {e}")
            return False

    async def sign_out(self) -> bool:
        """End the session held by this service's own client. Best effort: failures are logged, never raised"""
        return await self._sign_out(self.supabase)

    async def revoke(self, token: str) -> bool:
        """Invalidate a bearer token server-side and drop it from the token cache. Best effort."""
        forget_token(token)
        client = self.admin_client or self._session_client()
        try:
            await asyncio.to_thread(client.auth.admin.sign_out, token)
            return True
        except Exception as e:
            logger.error(f"Token revocation failed: {e}")
            return False

    async def get_session(self):
        """Persisted session held by the client library, or None"""
        try:
            return await asyncio.to_thread(self.supabase.auth.get_session)
        except Exception as e:
            logger.error(f"Could not restore session: {e}")
            return None

    def subscribe(self, callback: Callable[[str, Any], None]):
        """Forward the client library's auth state changes (event name, session) to callback"""
        try:
            return self.supabase.auth.on_auth_state_change(callback)
        except Exception as e:
            logger.warning(f"Auth state subscription unavailable: {e}")
            return None

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        cache_key = _cache_key(token)
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise AuthError("Invalid or expired token") from e
            raise AuthError("Authentication failed") from e
        if not user_response or not user_response.user:
            raise AuthError("Invalid or expired token")
        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data
