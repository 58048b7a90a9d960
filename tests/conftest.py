"""Shared fixtures: an in-memory stand-in for the Supabase async client"""
import asyncio
import itertools
from typing import Any, Callable, Dict, List, Optional

import pytest
from supabase import AuthError  # type: ignore

from app.config import Settings
from app.flow.navigation import Navigator
from app.flow.notices import Notice, NoticeBoard
from app.infra.supabase.client import StoreHandle
from app.infra.supabase.session import AuthSession
from app.services.gateway import ProfileGateway


class InvalidCredentialsError(AuthError):
    """Auth failure raised by the fake auth client"""

    def __init__(self, message: str):
        Exception.__init__(self, message)
        self.message = message


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    """Subset of the PostgREST request builder used by the repositories"""

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._op = "select"
        self._filters: List[tuple] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None
        self._payload: Optional[Dict[str, Any]] = None
        self._on_conflict: Optional[str] = None

    def select(self, *columns, **kwargs):
        self._op = "select"
        return self

    def eq(self, column: str, value: Any):
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def upsert(self, data: Dict[str, Any], on_conflict: str = ""):
        self._op = "upsert"
        self._payload = dict(data)
        self._on_conflict = on_conflict
        return self

    def update(self, data: Dict[str, Any]):
        self._op = "update"
        self._payload = dict(data)
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    async def execute(self) -> FakeResponse:
        self._db.calls.append({
            "op": self._op,
            "table": self._table,
            "filters": list(self._filters),
            "order": self._order,
            "limit": self._limit,
            "payload": self._payload,
            "on_conflict": self._on_conflict,
        })
        if self._db.fail_with is not None:
            raise self._db.fail_with

        rows = self._db.tables.setdefault(self._table, {})

        if self._op == "upsert":
            key = self._payload[self._on_conflict]
            rows[key] = dict(self._payload)
            return FakeResponse([dict(self._payload)])

        if self._op == "update":
            updated = []
            for row in rows.values():
                if self._matches(row):
                    row.update(self._payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        result = [dict(row) for row in rows.values() if self._matches(row)]
        if self._order is not None:
            column, desc = self._order
            result.sort(key=lambda r: r.get(column) or 0, reverse=desc)
        if self._limit is not None:
            result = result[:self._limit]
        return FakeResponse(result)


class FakeUser:
    def __init__(self, id: str):
        self.id = id


class FakeAuthResponse:
    def __init__(self, user: Optional[FakeUser]):
        self.user = user
        self.session = None


class FakeSubscription:
    def __init__(self, auth: "FakeAuth", callback: Callable):
        self._auth = auth
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._auth.listeners:
            self._auth.listeners.remove(self._callback)


class FakeAuth:
    """Subset of the async auth client used by the gateway"""

    def __init__(self):
        self.accounts: Dict[str, tuple] = {}
        self.calls: List[str] = []
        self.listeners: List[Callable] = []
        self.fail_with: Optional[BaseException] = None
        self.signed_out = False
        self._ids = itertools.count(1)

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    async def sign_up(self, credentials: Dict[str, str]) -> FakeAuthResponse:
        self._check("sign_up")
        email = credentials["email"]
        if email in self.accounts:
            raise InvalidCredentialsError("User already registered")
        user_id = f"user-{next(self._ids)}"
        self.accounts[email] = (credentials["password"], user_id)
        return FakeAuthResponse(FakeUser(user_id))

    async def sign_in_with_password(self, credentials: Dict[str, str]) -> FakeAuthResponse:
        self._check("sign_in_with_password")
        account = self.accounts.get(credentials["email"])
        if account is None or account[0] != credentials["password"]:
            raise InvalidCredentialsError("Invalid login credentials")
        return FakeAuthResponse(FakeUser(account[1]))

    async def reset_password_for_email(self, email: str, options: Optional[dict] = None) -> None:
        self._check("reset_password_for_email")

    async def sign_out(self) -> None:
        # revoke first, then drop the local session and emit SIGNED_OUT
        self._check("sign_out")
        await asyncio.sleep(0)
        self.signed_out = True
        self.emit("SIGNED_OUT", None)

    def on_auth_state_change(self, callback: Callable) -> FakeSubscription:
        self.listeners.append(callback)
        return FakeSubscription(self, callback)

    def emit(self, event: str, session: Any) -> None:
        for callback in list(self.listeners):
            callback(event, session)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.fail_with: Optional[BaseException] = None
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, *rows: Dict[str, Any], table: str = "users") -> None:
        stored = self.tables.setdefault(table, {})
        for row in rows:
            stored[row["userId"]] = dict(row)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="service-role-key",
        splash_delay_seconds=0,
    )


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def store(settings: Settings, fake_supabase: FakeSupabase) -> StoreHandle:
    return StoreHandle(settings, client=fake_supabase)


@pytest.fixture
def session() -> AuthSession:
    return AuthSession()


@pytest.fixture
def gateway(store: StoreHandle, session: AuthSession) -> ProfileGateway:
    return ProfileGateway(store, session)


@pytest.fixture
def notices() -> List[Notice]:
    return []


@pytest.fixture
def notice_board(notices: List[Notice]) -> NoticeBoard:
    board = NoticeBoard()
    board.subscribe(notices.append)
    return board


@pytest.fixture
def navigator() -> Navigator:
    return Navigator()


async def drain() -> None:
    """Let pending background tasks run to completion"""
    for _ in range(5):
        await asyncio.sleep(0)


def user_row(user_id: str, last_active: int, **fields: Any) -> Dict[str, Any]:
    row = {
        "userId": user_id,
        "email": f"{user_id}@example.com",
        "fullName": fields.pop("fullName", user_id.title()),
        "lastActive": last_active,
        "photoUrls": [],
        "interests": [],
    }
    row.update(fields)
    return row
