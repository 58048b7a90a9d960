"""Repository factory and exports"""
from supabase import AsyncClient  # type: ignore
from .profiles import ProfileRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: AsyncClient, users_table: str = "users"):
        self._client = client
        self._users_table = users_table
        self._profiles: ProfileRepository = None

    @property
    def profiles(self) -> ProfileRepository:
        """Get profiles repository"""
        if self._profiles is None:
            self._profiles = ProfileRepository(self._client, self._users_table)
        return self._profiles


__all__ = [
    'RepositoryFactory',
    'ProfileRepository',
]
