"""Screen flow as a finite-state machine, independent of any UI toolkit"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from app.exceptions import InvalidTransitionError
from app.models.profile import Profile

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    SPLASH = "splash"
    ONBOARDING = "onboarding"
    LOGIN = "login"
    SIGNUP = "signup"
    MAIN = "main"
    PROFILE_DETAIL = "profile_detail"


class Tab(str, Enum):
    """Bottom navigation tabs of the main screen"""
    FOR_YOU = "for_you"
    DISCOVER = "discover"
    MESSAGES = "messages"
    PROFILE = "profile"


class Event(str, Enum):
    SESSION_FOUND = "session_found"
    NO_SESSION = "no_session"
    GET_STARTED = "get_started"
    OPEN_SIGNUP = "open_signup"
    OPEN_LOGIN = "open_login"
    AUTHENTICATED = "authenticated"
    SELECT_TAB = "select_tab"
    OPEN_PROFILE = "open_profile"
    LIKE = "like"
    MESSAGE = "message"
    CLOSE = "close"
    BACK = "back"
    SIGNED_OUT = "signed_out"


DEFAULT_TAB = Tab.FOR_YOU

# Tabs whose content is a profile feed; only these can open a profile
FEED_TABS = (Tab.FOR_YOU, Tab.DISCOVER)

# Tabs that are not built yet: selecting them only shows a notice
STUB_TABS: Dict[Tab, str] = {
    Tab.MESSAGES: "Messages coming soon!",
    Tab.PROFILE: "Profile editing coming soon!",
}

TRANSITIONS: Dict[Tuple[Screen, Event], Screen] = {
    (Screen.SPLASH, Event.SESSION_FOUND): Screen.MAIN,
    (Screen.SPLASH, Event.NO_SESSION): Screen.ONBOARDING,
    (Screen.ONBOARDING, Event.GET_STARTED): Screen.LOGIN,
    (Screen.LOGIN, Event.OPEN_SIGNUP): Screen.SIGNUP,
    (Screen.SIGNUP, Event.OPEN_LOGIN): Screen.LOGIN,
    (Screen.LOGIN, Event.AUTHENTICATED): Screen.MAIN,
    (Screen.SIGNUP, Event.AUTHENTICATED): Screen.MAIN,
    (Screen.MAIN, Event.SELECT_TAB): Screen.MAIN,
    (Screen.MAIN, Event.OPEN_PROFILE): Screen.PROFILE_DETAIL,
    (Screen.MAIN, Event.SIGNED_OUT): Screen.LOGIN,
    (Screen.PROFILE_DETAIL, Event.LIKE): Screen.MAIN,
    (Screen.PROFILE_DETAIL, Event.MESSAGE): Screen.PROFILE_DETAIL,
    (Screen.PROFILE_DETAIL, Event.CLOSE): Screen.MAIN,
}

# Back navigation; None means the application exits
BACK_TARGETS: Dict[Screen, Optional[Screen]] = {
    Screen.ONBOARDING: None,
    Screen.LOGIN: Screen.ONBOARDING,
    Screen.SIGNUP: Screen.LOGIN,
    Screen.PROFILE_DETAIL: Screen.MAIN,
}


@dataclass(frozen=True)
class Transition:
    """Outcome of one dispatched event"""
    event: Event
    source: Screen
    target: Screen
    tab: Tab
    notice: Optional[str] = None
    backgrounded: bool = False
    exited: bool = False

    @property
    def changed(self) -> bool:
        return self.source != self.target


class Navigator:
    """
    Holds the current screen, the selected main tab and the profile shown in
    the detail screen, and moves between them as events arrive.
    """

    def __init__(self, screen: Screen = Screen.SPLASH):
        self.screen = screen
        self.tab = DEFAULT_TAB
        self.selected_profile: Optional[Profile] = None
        self.backgrounded = False
        self.exited = False

    def dispatch(self, event: Event, tab: Optional[Tab] = None, profile: Optional[Profile] = None) -> Transition:
        """
        Apply `event` to the current state.

        Raises:
            InvalidTransitionError: the event is not accepted here
        """
        if self.exited:
            raise InvalidTransitionError("Application has exited")

        if event is Event.BACK:
            transition = self._back()
        elif event is Event.SELECT_TAB:
            transition = self._select_tab(tab)
        elif event is Event.OPEN_PROFILE:
            transition = self._open_profile(profile)
        else:
            transition = self._apply(event)

        self.screen = transition.target
        self.tab = transition.tab
        if transition.target is not Screen.MAIN:
            self.backgrounded = False

        logger.debug(
            f"Navigation {event.value}: {transition.source.value} -> {transition.target.value} "
            f"(tab={transition.tab.value})"
        )
        return transition

    def _target_for(self, event: Event) -> Screen:
        target = TRANSITIONS.get((self.screen, event))
        if target is None:
            raise InvalidTransitionError(f"{event.value} is not valid on {self.screen.value}")
        return target

    def _apply(self, event: Event) -> Transition:
        source = self.screen
        target = self._target_for(event)
        tab = self.tab

        if event in (Event.SESSION_FOUND, Event.AUTHENTICATED):
            tab = DEFAULT_TAB
            self.backgrounded = False
        if event is Event.SIGNED_OUT:
            tab = DEFAULT_TAB
        if target is not Screen.PROFILE_DETAIL:
            self.selected_profile = None

        return Transition(event, source, target, tab)

    def _select_tab(self, tab: Optional[Tab]) -> Transition:
        self._target_for(Event.SELECT_TAB)
        if tab is None:
            raise InvalidTransitionError("select_tab needs a tab")

        notice = STUB_TABS.get(tab)
        if notice is not None:
            return Transition(Event.SELECT_TAB, self.screen, self.screen, self.tab, notice=notice)

        return Transition(Event.SELECT_TAB, self.screen, Screen.MAIN, tab)

    def _open_profile(self, profile: Optional[Profile]) -> Transition:
        target = self._target_for(Event.OPEN_PROFILE)
        if profile is None:
            raise InvalidTransitionError("open_profile needs a selected profile")
        if self.tab not in FEED_TABS:
            raise InvalidTransitionError(f"Profiles cannot be opened from the {self.tab.value} tab")

        self.selected_profile = profile
        return Transition(Event.OPEN_PROFILE, self.screen, target, self.tab)

    def _back(self) -> Transition:
        source = self.screen

        if source is Screen.SPLASH:
            return Transition(Event.BACK, source, source, self.tab)

        if source is Screen.MAIN:
            if self.tab is not DEFAULT_TAB:
                return Transition(Event.BACK, source, source, DEFAULT_TAB)
            # leave the session alone, just send the app to the background
            self.backgrounded = True
            return Transition(Event.BACK, source, source, self.tab, backgrounded=True)

        target = BACK_TARGETS.get(source)
        if target is None:
            self.exited = True
            return Transition(Event.BACK, source, source, self.tab, exited=True)

        if source is Screen.PROFILE_DETAIL:
            self.selected_profile = None
        return Transition(Event.BACK, source, target, self.tab)
