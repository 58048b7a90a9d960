import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment (and .env)"""
    supabase_url: Optional[str]
    supabase_key: Optional[str]
    users_table: str = "users"
    recent_profiles_limit: int = 50
    splash_delay_seconds: float = 2.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from environment variables"""
    # Service role key for the backend; anon key is enough for a client session
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=key,
        users_table=os.getenv("USERS_TABLE", "users"),
        recent_profiles_limit=int(os.getenv("RECENT_PROFILES_LIMIT", "50")),
        splash_delay_seconds=float(os.getenv("SPLASH_DELAY_SECONDS", "2.0")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
