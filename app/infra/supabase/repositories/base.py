"""Base repository with common table operations"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from supabase import AsyncClient  # type: ignore

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.
    """

    def __init__(self, client: AsyncClient, table_name: str, model_class: Type[T], key_column: str = "id"):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class
        self._key_column = key_column

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class.model_validate(data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    async def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by its key"""
        response = await (
            self._client.table(self._table_name)
            .select("*")
            .eq(self._key_column, id)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_all(
        self,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
    ) -> List[T]:
        """Find all records, optionally ordered and limited"""
        query = self._client.table(self._table_name).select("*")

        if order_by:
            query = query.order(order_by, desc=desc)

        if limit:
            query = query.limit(limit)

        response = await query.execute()
        return self._to_models(response.data)

    async def upsert(self, data: Dict[str, Any]) -> None:
        """Write a full record, replacing any existing one with the same key"""
        await (
            self._client.table(self._table_name)
            .upsert(data, on_conflict=self._key_column)
            .execute()
        )

    async def update_fields(self, id: str, data: Dict[str, Any]) -> None:
        """Update some columns of the record with the given key"""
        await (
            self._client.table(self._table_name)
            .update(data)
            .eq(self._key_column, id)
            .execute()
        )
