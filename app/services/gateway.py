"""Profile gateway - single access point to Supabase auth and the users table"""
import asyncio
import logging
from typing import Coroutine, List, Optional, Set

import httpx
from supabase import AuthError, PostgrestAPIError  # type: ignore

from app.exceptions import MissingProfileIdError, ProfileNotFoundError, StoreError
from app.infra.supabase.client import StoreHandle
from app.infra.supabase.repositories import RepositoryFactory
from app.infra.supabase.repositories.profiles import ProfileRepository
from app.infra.supabase.session import SessionSource
from app.models.profile import Profile
from app.utils.datetime_helper import next_stamp, now_millis

logger = logging.getLogger(__name__)

# Errors coming out of the Supabase client or its HTTP transport
TRANSPORT_ERRORS = (PostgrestAPIError, AuthError, httpx.HTTPError)


class ProfileGateway:
    """
    Session state plus create/read/update of profile records.

    Every network-bound operation is a coroutine that either returns or
    raises a `StoreError` exactly once. Nothing is retried and every save is
    a full overwrite of the row.
    """

    def __init__(self, store: StoreHandle, session: SessionSource):
        self._store = store
        self._session = session
        self._repositories: Optional[RepositoryFactory] = None
        # fire-and-forget tasks, kept referenced until they finish
        self._background: Set[asyncio.Task] = set()
        self._pending_sign_out: Optional[asyncio.Task] = None

    @property
    def _profiles(self) -> ProfileRepository:
        if self._repositories is None:
            self._repositories = RepositoryFactory(self._store.client, self._store.settings.users_table)
        return self._repositories.profiles

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    # =========================
    # Session
    # =========================

    def current_session_user_id(self) -> Optional[str]:
        """Signed-in user id, read from cached session state"""
        return self._session.current_user_id()

    def is_signed_in(self) -> bool:
        return self.current_session_user_id() is not None

    async def sign_up(self, email: str, password: str) -> str:
        """Create an auth account and make it the current session"""
        await self._settle_sign_out()
        try:
            response = await self._store.client.auth.sign_up({"email": email, "password": password})
        except TRANSPORT_ERRORS as e:
            logger.error(f"Sign up failed for {email}: {e}")
            raise StoreError.from_exception(e, "Signup failed") from e

        if response.user is None:
            raise StoreError("Signup failed")

        self._session.set_user_id(response.user.id)
        logger.info(f"Account created: {response.user.id}")
        return response.user.id

    async def sign_in(self, email: str, password: str) -> str:
        """Sign in with email/password and make it the current session"""
        await self._settle_sign_out()
        try:
            response = await self._store.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except TRANSPORT_ERRORS as e:
            logger.error(f"Sign in failed for {email}: {e}")
            raise StoreError.from_exception(e, "Login failed") from e

        if response.user is None:
            raise StoreError("Login failed")

        self._session.set_user_id(response.user.id)
        logger.info(f"Signed in: {response.user.id}")
        return response.user.id

    async def send_password_reset(self, email: str) -> None:
        try:
            await self._store.client.auth.reset_password_for_email(email)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Password reset email failed for {email}: {e}")
            raise StoreError.from_exception(e) from e
        logger.info(f"Password reset email sent to {email}")

    def sign_out(self) -> None:
        """
        Clear the session now; the auth client is told in the background.
        """
        self._session.set_user_id(None)
        self._pending_sign_out = self._spawn(self._sign_out_remote())
        logger.info("Signed out")

    async def _sign_out_remote(self) -> None:
        try:
            await self._store.client.auth.sign_out()
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error signing out of auth client: {e}")

    async def _settle_sign_out(self) -> None:
        """Let a pending sign-out emit SIGNED_OUT before a new session is set"""
        task = self._pending_sign_out
        self._pending_sign_out = None
        if task is not None and not task.done():
            await task

    # =========================
    # Profile CRUD
    # =========================

    async def save_profile(self, profile: Profile) -> Profile:
        """
        Overwrite the stored row for `profile.id` with every field of `profile`.

        lastActive is the current time, strictly after the stored row's value;
        the caller's value is ignored. createdAt keeps the stored value, and a
        new row takes `profile.created_at`, else now.

        Returns:
            The profile exactly as written

        Raises:
            MissingProfileIdError: id is empty; no call is made
            StoreError: the store rejected the write
        """
        if not profile.id or not profile.id.strip():
            raise MissingProfileIdError()

        try:
            stored = await self._profiles.find_by_id(profile.id)
            now = now_millis()
            if stored is not None and stored.created_at:
                created_at = stored.created_at
            else:
                created_at = profile.created_at or now
            stamped = profile.model_copy(update={
                "created_at": created_at,
                "last_active": next_stamp(stored.last_active if stored else 0, now),
            })
            await self._profiles.replace(stamped)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error saving user profile {profile.id}: {e}", exc_info=True)
            raise StoreError.from_exception(e) from e

        logger.info(f"User profile saved: {profile.id}")
        return stamped

    async def fetch_profile(self, user_id: str) -> Profile:
        """
        Point lookup by id.

        Raises:
            ProfileNotFoundError: no row for `user_id`
            StoreError: transport failure
        """
        try:
            profile = await self._profiles.find_by_id(user_id)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error fetching user profile {user_id}: {e}", exc_info=True)
            raise StoreError.from_exception(e) from e

        if profile is None:
            logger.info(f"User not found: {user_id}")
            raise ProfileNotFoundError(user_id)

        if not profile.id:
            profile = profile.model_copy(update={"id": user_id})

        logger.info(f"User fetched: {user_id}")
        return profile

    async def list_recent_profiles(self) -> List[Profile]:
        """
        Most recently active profiles, newest first, without the current user.

        There is no location filtering; "nearby" is just "recently active".
        """
        current_user_id = self.current_session_user_id()
        limit = self._store.settings.recent_profiles_limit

        try:
            profiles = await self._profiles.find_recent(limit)
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error fetching nearby users: {e}", exc_info=True)
            raise StoreError.from_exception(e) from e

        users = [p for p in profiles if not (current_user_id and p.id == current_user_id)]
        logger.info(f"Nearby users fetched: {len(users)}")
        return users

    def touch_last_active(self) -> Optional[asyncio.Task]:
        """
        Fire-and-forget refresh of the current user's lastActive.

        Returns the background task, or None when nobody is signed in.
        """
        user_id = self.current_session_user_id()
        if user_id is None:
            return None
        return self._spawn(self._touch(user_id))

    async def _touch(self, user_id: str) -> None:
        try:
            await self._profiles.touch(user_id, now_millis())
            logger.debug(f"Last active updated: {user_id}")
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error updating lastActive for {user_id}: {e}")
