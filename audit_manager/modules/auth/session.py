"""
Process-wide session and profile store.

SessionManager is the single writer of the current (session, profile) pair.
Consumers hold a reference to it and subscribe with on_session_change; each
publication is an immutable SessionSnapshot.

States: UNINITIALIZED -> LOADING -> AUTHENTICATED | ANONYMOUS.
AUTHENTICATED falls back to ANONYMOUS on sign-out or expiry, and ANONYMOUS
goes through LOADING to AUTHENTICATED on a successful sign-in. An
AUTHENTICATED snapshot may carry profile=None when the profile lookup failed
or no row exists.

Every session change starts one profile refresh and cancels the refresh
still in flight, so a stale lookup can never overwrite a newer one.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from supabase import Client
from audit_manager.core.enums import Role
from audit_manager.modules.auth.service import AuthService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.modules.profiles.service import ProfileService

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class SessionSnapshot:
    state: AuthState
    session: Any = None
    profile: Optional[ProfileResponse] = None

    @property
    def user_id(self) -> Optional[str]:
        user = getattr(self.session, "user", None)
        return getattr(user, "id", None)

    @property
    def role(self) -> Optional[Role]:
        return self.profile.role if self.profile else None


SessionListener = Callable[[SessionSnapshot], None]


class SessionManager:
    def __init__(self, supabase: Client, admin_client: Optional[Client] = None):
        self.auth = AuthService(supabase, admin_client)
        self.profiles = ProfileService(supabase)
        self._snapshot = SessionSnapshot(AuthState.UNINITIALIZED)
        self._listeners: List[SessionListener] = []
        self._refresh_task: Optional[asyncio.Task] = None
        self._subscription = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def state(self) -> AuthState:
        return self._snapshot.state

    @property
    def session(self):
        return self._snapshot.session

    @property
    def profile(self) -> Optional[ProfileResponse]:
        return self._snapshot.profile

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def initialize(self) -> SessionSnapshot:
        """Restore any persisted session. Nothing should render before this returns."""
        if self._snapshot.state != AuthState.UNINITIALIZED:
            return self._snapshot
        self._loop = asyncio.get_running_loop()
        self._publish(SessionSnapshot(AuthState.LOADING))
        self._subscription = self.auth.subscribe(self._on_auth_event)
        session = await self.auth.get_session()
        await self._apply_session(session)
        return self._snapshot

    async def sign_in(self, email: str, password: str):
        """Raises AuthError on bad credentials; the current state is left untouched then."""
        self._loop = asyncio.get_running_loop()
        response = await self.auth.sign_in(email, password)
        await self._apply_session(response.session)
        return response.session

    async def sign_up(self, email: str, password: str, full_name: str, role: Role = Role.TEAM):
        """Create identity + profile. Returns the new session, or None when email confirmation is pending."""
        self._loop = asyncio.get_running_loop()
        response = await self.auth.sign_up(email, password, full_name, role)
        if response.session is not None:
            await self._apply_session(response.session)
        return response.session

    async def sign_out(self) -> None:
        await self.auth.sign_out()
        self._schedule_refresh(None)

    async def close(self) -> None:
        """Cancel the pending profile refresh and drop the auth subscription"""
        task = self._refresh_task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})
        self._refresh_task = None
        if self._subscription is not None:
            try:
                self._subscription.unsubscribe()
            except Exception as e:
                logger.warning(f"Auth subscription cleanup failed: {e}")
            self._subscription = None

    # Auth events arrive on whatever thread the client library used
    def _on_auth_event(self, event: str, session) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(self._handle_auth_event, event, session)

    def _handle_auth_event(self, event: str, session) -> None:
        if self._snapshot.state == AuthState.UNINITIALIZED:
            return
        logger.debug(f"Auth event {event}")
        self._schedule_refresh(session)

    async def _apply_session(self, session) -> None:
        self._schedule_refresh(session)
        await self._settle()

    async def _settle(self) -> None:
        # A newer event may replace the task while we wait; follow it until one finishes
        while self._refresh_task is not None and not self._refresh_task.done():
            await asyncio.wait({self._refresh_task})

    def _schedule_refresh(self, session) -> Optional[asyncio.Task]:
        previous = self._refresh_task
        if previous is not None and not previous.done():
            previous.cancel()
        self._refresh_task = None

        if session is None or getattr(session, "user", None) is None:
            self._publish(SessionSnapshot(AuthState.ANONYMOUS))
            return None

        current = self._snapshot
        same_identity = current.state == AuthState.AUTHENTICATED and current.user_id == session.user.id
        if not same_identity:
            self._publish(SessionSnapshot(AuthState.LOADING, session=session))
        self._refresh_task = asyncio.get_running_loop().create_task(self._refresh_profile(session))
        return self._refresh_task

    async def _refresh_profile(self, session) -> None:
        user_id = session.user.id
        try:
            profile = await self.profiles.get_profile(user_id)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Profile lookup for {user_id} failed: {e}")
            profile = None
        if profile is None:
            logger.warning(f"Session for {user_id} has no usable profile")
        self._publish(SessionSnapshot(AuthState.AUTHENTICATED, session=session, profile=profile))

    def _publish(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")
