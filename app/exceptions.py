"""Error types raised by the store gateway and the screen flow"""
from typing import Optional


class StoreError(Exception):
    """
    Backend or transport failure.

    `message` is the human-readable text taken from the underlying client,
    unchanged, so it can be shown to the user as a transient notice.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def from_exception(cls, exc: BaseException, fallback: Optional[str] = None) -> "StoreError":
        """Wrap a client exception, keeping its message verbatim"""
        message = getattr(exc, "message", None) or str(exc) or fallback or exc.__class__.__name__
        return cls(str(message))


class ProfileNotFoundError(StoreError):
    """No profile row exists for the requested id"""

    def __init__(self, user_id: str):
        super().__init__("User not found")
        self.user_id = user_id


class MissingProfileIdError(StoreError):
    """Save attempted on a profile without an id; no call was made"""

    def __init__(self):
        super().__init__("Missing userId")


class InvalidTransitionError(ValueError):
    """Event not accepted by the navigator in its current state"""
