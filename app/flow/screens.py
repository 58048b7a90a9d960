"""Screen controllers: transient view state plus the calls each screen makes"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from app.exceptions import StoreError
from app.flow.navigation import Event, Navigator, Tab, Transition
from app.flow.notices import NoticeBoard
from app.models.profile import Profile
from app.presentation.adapters import (
    DiscoverGridAdapter,
    ImageLoader,
    ProfileCardAdapter,
    ProfileListAdapter,
)
from app.services.gateway import ProfileGateway
from app.utils.datetime_helper import now_millis
from app.utils.validation import FieldError, validate_login, validate_signup

logger = logging.getLogger(__name__)

SPLASH_DURATION = 2.0


class SplashScreen:
    """Waits a fixed delay, then routes on whether a session exists"""

    def __init__(self, gateway: ProfileGateway, navigator: Navigator, delay: float = SPLASH_DURATION):
        self._gateway = gateway
        self._navigator = navigator
        self._delay = delay

    async def run(self) -> Transition:
        await asyncio.sleep(self._delay)
        event = Event.SESSION_FOUND if self._gateway.is_signed_in() else Event.NO_SESSION
        return self._navigator.dispatch(event)

    def back(self) -> Transition:
        return self._navigator.dispatch(Event.BACK)


class OnboardingScreen:
    def __init__(self, navigator: Navigator):
        self._navigator = navigator

    def get_started(self) -> Transition:
        return self._navigator.dispatch(Event.GET_STARTED)

    def back(self) -> Transition:
        return self._navigator.dispatch(Event.BACK)


class _FormScreen:
    """Shared state of the login and signup forms"""

    def __init__(self, gateway: ProfileGateway, navigator: Navigator, notices: NoticeBoard):
        self._gateway = gateway
        self._navigator = navigator
        self._notices = notices
        self.field_error: Optional[FieldError] = None
        self.loading = False
        self.submit_enabled = True

    def error_for(self, field: str) -> Optional[str]:
        if self.field_error is not None and self.field_error.field == field:
            return self.field_error.message
        return None

    def _set_busy(self, busy: bool) -> None:
        self.loading = busy
        self.submit_enabled = not busy

    def back(self) -> Transition:
        return self._navigator.dispatch(Event.BACK)


class LoginScreen(_FormScreen):
    def __init__(self, gateway: ProfileGateway, navigator: Navigator, notices: NoticeBoard):
        super().__init__(gateway, navigator, notices)
        self.email = ""
        self.password = ""

    async def submit(self) -> bool:
        """Validate, then sign in. Returns True once the main screen is shown."""
        email = self.email.strip()
        password = self.password.strip()

        self.field_error = validate_login(email, password)
        if self.field_error is not None:
            return False

        self._set_busy(True)
        try:
            await self._gateway.sign_in(email, password)
        except StoreError as e:
            self._set_busy(False)
            self._notices.show(e.message or "Login failed", long=True)
            return False

        self._set_busy(False)
        self._notices.show("Login successful!")
        self._navigator.dispatch(Event.AUTHENTICATED)
        return True

    async def forgot_password(self) -> bool:
        email = self.email.strip()
        if not email:
            self._notices.show("Please enter your email first")
            return False

        try:
            await self._gateway.send_password_reset(email)
        except StoreError:
            self._notices.show("Failed to send reset email. Please try again.", long=True)
            return False

        self._notices.show("Password reset email sent. Check your inbox.", long=True)
        return True

    def open_signup(self) -> Transition:
        return self._navigator.dispatch(Event.OPEN_SIGNUP)


class SignupScreen(_FormScreen):
    def __init__(self, gateway: ProfileGateway, navigator: Navigator, notices: NoticeBoard):
        super().__init__(gateway, navigator, notices)
        self.full_name = ""
        self.email = ""
        self.password = ""
        self.confirm_password = ""

    async def submit(self) -> bool:
        """
        Validate, create the auth account, then write the starting profile.
        Returns True once the main screen is shown.
        """
        full_name = self.full_name.strip()
        email = self.email.strip()
        password = self.password.strip()
        confirm_password = self.confirm_password.strip()

        self.field_error = validate_signup(full_name, email, password, confirm_password)
        if self.field_error is not None:
            return False

        self._set_busy(True)
        try:
            user_id = await self._gateway.sign_up(email, password)
        except StoreError as e:
            self._set_busy(False)
            self._notices.show(e.message or "Signup failed", long=True)
            return False

        profile = Profile.for_signup(user_id, full_name, email, now_millis())
        try:
            await self._gateway.save_profile(profile)
        except StoreError as e:
            self._set_busy(False)
            self._notices.show(f"Failed to create profile: {e.message}", long=True)
            return False

        self._set_busy(False)
        self._notices.show("Account created successfully!")
        self._navigator.dispatch(Event.AUTHENTICATED)
        return True

    def open_login(self) -> Transition:
        return self._navigator.dispatch(Event.OPEN_LOGIN)


class MainScreen:
    """Tab host; refreshes last-active whenever it comes to the foreground"""

    def __init__(self, gateway: ProfileGateway, navigator: Navigator, notices: NoticeBoard):
        self._gateway = gateway
        self._navigator = navigator
        self._notices = notices

    @property
    def tab(self) -> Tab:
        return self._navigator.tab

    def start(self) -> Optional[asyncio.Task]:
        return self._gateway.touch_last_active()

    def resume(self) -> Optional[asyncio.Task]:
        self._navigator.backgrounded = False
        return self._gateway.touch_last_active()

    def select_tab(self, tab: Tab) -> Transition:
        transition = self._navigator.dispatch(Event.SELECT_TAB, tab=tab)
        if transition.notice:
            self._notices.show(transition.notice)
        return transition

    def back(self) -> Transition:
        return self._navigator.dispatch(Event.BACK)

    def sign_out(self) -> Transition:
        self._gateway.sign_out()
        return self._navigator.dispatch(Event.SIGNED_OUT)


class FeedScreen(ABC):
    """Loads recent profiles into an adapter; base for For You and Discover"""

    def __init__(
        self,
        gateway: ProfileGateway,
        navigator: Navigator,
        notices: NoticeBoard,
        adapter: ProfileListAdapter,
    ):
        self._gateway = gateway
        self._navigator = navigator
        self._notices = notices
        self.adapter = adapter
        self.loading = False
        self.empty = False

    @abstractmethod
    def _loaded_notice(self, count: int) -> str:
        """Notice shown after a non-empty load"""

    def _show_empty(self) -> None:
        self.empty = True

    async def load(self) -> List[Profile]:
        self.loading = True
        try:
            users = await self._gateway.list_recent_profiles()
        except StoreError as e:
            self.loading = False
            self._notices.show(f"Failed to load users: {e.message}")
            self._on_load_failed()
            return []

        self.loading = False
        if not users:
            self._show_empty()
            return []

        self.adapter.update_data(users)
        self.empty = False
        self._notices.show(self._loaded_notice(len(users)))
        return users

    def _on_load_failed(self) -> None:
        pass

    def open_profile(self, profile: Profile) -> Transition:
        return self._navigator.dispatch(Event.OPEN_PROFILE, profile=profile)


class ForYouScreen(FeedScreen):
    """Card stack: like, pass, or tap a card to open the full profile"""

    def __init__(
        self,
        gateway: ProfileGateway,
        navigator: Navigator,
        notices: NoticeBoard,
        image_loader: Optional[ImageLoader] = None,
    ):
        adapter = ProfileCardAdapter(on_select=self.open_profile, image_loader=image_loader)
        super().__init__(gateway, navigator, notices, adapter)

    def _loaded_notice(self, count: int) -> str:
        return f"Loaded {count} users"

    def _show_empty(self) -> None:
        super()._show_empty()
        self._notices.show("No users nearby. Check back later!")

    def like(self, position: int) -> Profile:
        profile = self.adapter.profile_at(position)
        self._notices.show(f"Liked {profile.first_name}! 💚")
        return profile

    def pass_profile(self, position: int) -> Optional[Profile]:
        profile = self.adapter.remove_at(position)
        if profile is not None:
            self._notices.show(f"Passed on {profile.first_name}")
        return profile


class DiscoverScreen(FeedScreen):
    """Grid of recent profiles"""

    def __init__(
        self,
        gateway: ProfileGateway,
        navigator: Navigator,
        notices: NoticeBoard,
        image_loader: Optional[ImageLoader] = None,
    ):
        adapter = DiscoverGridAdapter(on_select=self.open_profile, image_loader=image_loader)
        super().__init__(gateway, navigator, notices, adapter)

    def _loaded_notice(self, count: int) -> str:
        return f"Found {count} users"

    def _on_load_failed(self) -> None:
        self._show_empty()

    def apply_filters(self) -> None:
        # TODO: filter the loaded list once filter criteria exist on the profile
        self._notices.show("Filters applied!")


class ProfileDetailScreen:
    """Full view of the profile selected in a feed"""

    def __init__(self, navigator: Navigator, notices: NoticeBoard):
        if navigator.selected_profile is None:
            raise ValueError("No profile selected")
        self._navigator = navigator
        self._notices = notices
        self.profile: Profile = navigator.selected_profile
        self.playing = False

    @property
    def name_age(self) -> str:
        return self.profile.name_age

    @property
    def location(self) -> str:
        return self.profile.formatted_distance

    @property
    def match(self) -> str:
        return f"{self.profile.match_percentage}%"

    @property
    def has_voice_note(self) -> bool:
        return self.profile.voice_note_duration > 0

    @property
    def voice_duration(self) -> str:
        minutes, seconds = divmod(self.profile.voice_note_duration, 60)
        return f"{minutes}:{seconds:02d}"

    @property
    def interests(self) -> List[str]:
        return list(self.profile.interests)

    def toggle_voice_note(self) -> bool:
        if not self.playing:
            self._notices.show("Playing voice note...")
        self.playing = not self.playing
        return self.playing

    def more_options(self) -> None:
        self._notices.show("More options coming soon")

    def like(self) -> Transition:
        self.playing = False
        self._notices.show("Liked! It's a match! 💚")
        return self._navigator.dispatch(Event.LIKE)

    def message(self) -> Transition:
        self._notices.show("Message feature coming soon!")
        return self._navigator.dispatch(Event.MESSAGE)

    def close(self) -> Transition:
        self.playing = False
        return self._navigator.dispatch(Event.CLOSE)
