import pytest
from fastapi import HTTPException
from jose import jwt

from app.middleware import auth


@pytest.fixture(autouse=True)
def supabase_url(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co/")
    auth.clear_jwks_cache()
    yield
    auth.clear_jwks_cache()


def test_urls_derive_from_project_url():
    assert auth.get_jwks_url() == "https://example.supabase.co/auth/v1/.well-known/jwks.json"
    assert auth.get_jwt_issuer() == "https://example.supabase.co/auth/v1"


@pytest.mark.parametrize("header", [None, "Token abc", "Bearer ", "Bearer"])
async def test_bad_authorization_header(header):
    with pytest.raises(HTTPException) as exc_info:
        await auth.get_current_user_id(header)

    assert exc_info.value.status_code == 401


async def test_token_without_kid_is_rejected(monkeypatch):
    async def fake_jwks():
        return {"keys": []}

    monkeypatch.setattr(auth, "get_jwks", fake_jwks)
    token = jwt.encode({"sub": "u1"}, "secret", algorithm="HS256")

    with pytest.raises(HTTPException) as exc_info:
        await auth.verify_token(token)

    assert exc_info.value.detail == "Token missing key ID (kid)"


async def test_unknown_kid_is_rejected(monkeypatch):
    async def fake_jwks():
        return {"keys": [{"kid": "other"}]}

    monkeypatch.setattr(auth, "get_jwks", fake_jwks)
    token = jwt.encode({"sub": "u1"}, "secret", algorithm="HS256", headers={"kid": "k1"})

    with pytest.raises(HTTPException) as exc_info:
        await auth.verify_token(token)

    assert exc_info.value.status_code == 401
    assert "k1" in exc_info.value.detail


async def test_cached_jwks_is_reused(monkeypatch):
    monkeypatch.setattr(auth, "_jwks_cache", {"keys": ["cached"]})
    monkeypatch.setattr(auth, "_jwks_cache_time", auth.time.time())

    assert await auth.get_jwks() == {"keys": ["cached"]}
