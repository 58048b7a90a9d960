"""Profiles repository"""
from typing import List

from supabase import AsyncClient  # type: ignore

from app.models.profile import Profile

from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for the users table, one row per profile keyed by userId"""

    def __init__(self, client: AsyncClient, table_name: str = "users"):
        super().__init__(client, table_name, Profile, key_column="userId")

    async def find_recent(self, limit: int) -> List[Profile]:
        """Most recently active profiles first"""
        return await self.find_all(limit=limit, order_by="lastActive", desc=True)

    async def replace(self, profile: Profile) -> None:
        """Overwrite the whole row for this profile"""
        await self.upsert(profile.to_document())

    async def touch(self, user_id: str, last_active: int) -> None:
        await self.update_fields(user_id, {"lastActive": last_active})
