"""Supabase client handle"""
import logging
from typing import Optional

from supabase import AsyncClient, acreate_client  # type: ignore

from app.config import Settings

logger = logging.getLogger(__name__)


class StoreHandle:
    """
    Owns the Supabase async client (auth + database).

    Built explicitly from settings and passed to whatever needs the store.
    `initialize()` creates the client, `shutdown()` releases it.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncClient] = None):
        self._settings = settings
        self._client = client

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> AsyncClient:
        """The live client; only valid between initialize() and shutdown()"""
        if self._client is None:
            raise RuntimeError("StoreHandle is not initialized")
        return self._client

    async def initialize(self) -> AsyncClient:
        """Create the Supabase client if it does not exist yet"""
        if self._client is None:
            url = self._settings.supabase_url
            key = self._settings.supabase_key

            if not url or not key:
                raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

            self._client = await acreate_client(url, key)
            logger.info(f"Supabase client initialized for {url}")

        return self._client

    async def shutdown(self) -> None:
        """Drop the client; a later initialize() creates a fresh one"""
        if self._client is None:
            return
        self._client = None
        logger.info("Supabase client released")
