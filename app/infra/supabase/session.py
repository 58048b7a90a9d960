"""Where the current session's user id comes from"""
import logging
from typing import Any, Optional, Protocol

from supabase import AsyncClient  # type: ignore

logger = logging.getLogger(__name__)


class SessionSource(Protocol):
    """Read/write access to the signed-in user id; never touches the network"""

    def current_user_id(self) -> Optional[str]:
        ...

    def set_user_id(self, user_id: Optional[str]) -> None:
        ...


class AuthSession:
    """
    Session cached from the Supabase auth client.

    Follows the client's auth state-change events once attached, and is also
    updated directly by the gateway after sign-in, sign-up and sign-out.
    """

    def __init__(self, user_id: Optional[str] = None):
        self._user_id = user_id
        self._subscription: Any = None

    def attach(self, client: AsyncClient) -> None:
        """Start following auth state changes from `client`"""
        self.detach()
        self._subscription = client.auth.on_auth_state_change(self._on_auth_state_change)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_state_change(self, event: Any, session: Any) -> None:
        user = getattr(session, "user", None) if session is not None else None
        self._user_id = user.id if user is not None else None
        logger.debug(f"Auth state changed: {event} user_id={self._user_id}")

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    def set_user_id(self, user_id: Optional[str]) -> None:
        self._user_id = user_id


class BearerSession:
    """Session fixed to the subject of an already verified bearer token"""

    def __init__(self, user_id: str):
        self._user_id: Optional[str] = user_id

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    def set_user_id(self, user_id: Optional[str]) -> None:
        self._user_id = user_id
