"""Wiring for one running client: store, session, gateway, navigation and notices"""
import logging
from typing import Optional

from app.config import Settings
from app.flow.navigation import Navigator
from app.flow.notices import NoticeBoard
from app.flow.screens import (
    DiscoverScreen,
    ForYouScreen,
    LoginScreen,
    MainScreen,
    OnboardingScreen,
    ProfileDetailScreen,
    SignupScreen,
    SplashScreen,
)
from app.infra.supabase.client import StoreHandle
from app.infra.supabase.session import AuthSession
from app.presentation.adapters import ImageLoader
from app.services.gateway import ProfileGateway

logger = logging.getLogger(__name__)


class AppContext:
    """
    Builds the components explicitly and owns their lifecycle.

    Usage:
        async with AppContext(load_settings()) as ctx:
            await ctx.splash().run()
    """

    def __init__(self, settings: Settings, store: Optional[StoreHandle] = None):
        self.settings = settings
        self.store = store or StoreHandle(settings)
        self.session = AuthSession()
        self.gateway = ProfileGateway(self.store, self.session)
        self.navigator = Navigator()
        self.notices = NoticeBoard()

    async def initialize(self) -> None:
        client = await self.store.initialize()
        self.session.attach(client)
        logger.info("App context initialized")

    async def shutdown(self) -> None:
        self.session.detach()
        await self.store.shutdown()
        logger.info("App context shut down")

    async def __aenter__(self) -> "AppContext":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    def splash(self) -> SplashScreen:
        return SplashScreen(self.gateway, self.navigator, self.settings.splash_delay_seconds)

    def onboarding(self) -> OnboardingScreen:
        return OnboardingScreen(self.navigator)

    def login(self) -> LoginScreen:
        return LoginScreen(self.gateway, self.navigator, self.notices)

    def signup(self) -> SignupScreen:
        return SignupScreen(self.gateway, self.navigator, self.notices)

    def main(self) -> MainScreen:
        return MainScreen(self.gateway, self.navigator, self.notices)

    def for_you(self, image_loader: Optional[ImageLoader] = None) -> ForYouScreen:
        return ForYouScreen(self.gateway, self.navigator, self.notices, image_loader)

    def discover(self, image_loader: Optional[ImageLoader] = None) -> DiscoverScreen:
        return DiscoverScreen(self.gateway, self.navigator, self.notices, image_loader)

    def profile_detail(self) -> ProfileDetailScreen:
        return ProfileDetailScreen(self.navigator, self.notices)
