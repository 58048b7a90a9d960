"""Profile endpoints for the mobile client"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from app.exceptions import MissingProfileIdError, ProfileNotFoundError, StoreError
from app.infra.supabase.client import StoreHandle
from app.infra.supabase.session import BearerSession
from app.middleware.auth import get_current_user_id
from app.models.profile import Profile
from app.services.gateway import ProfileGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


def get_store(request: Request) -> StoreHandle:
    return request.app.state.store


def get_gateway(
    user_id: str = Depends(get_current_user_id),
    store: StoreHandle = Depends(get_store),
) -> ProfileGateway:
    """Gateway whose session is the authenticated caller"""
    return ProfileGateway(store, BearerSession(user_id))


def _to_http_error(e: StoreError) -> HTTPException:
    if isinstance(e, ProfileNotFoundError):
        return HTTPException(status_code=404, detail=e.message)
    if isinstance(e, MissingProfileIdError):
        return HTTPException(status_code=400, detail=e.message)
    return HTTPException(status_code=502, detail=e.message)


@router.get("/recent", response_model=List[Profile])
async def list_recent_profiles(gateway: ProfileGateway = Depends(get_gateway)):
    """
    Up to 50 most recently active profiles, newest first.
    The caller's own profile is never included.
    """
    try:
        return await gateway.list_recent_profiles()
    except StoreError as e:
        raise _to_http_error(e)


@router.get("/me", response_model=Profile)
async def get_my_profile(gateway: ProfileGateway = Depends(get_gateway)):
    try:
        return await gateway.fetch_profile(gateway.current_session_user_id())
    except StoreError as e:
        raise _to_http_error(e)


@router.put("/me", response_model=Profile)
async def save_my_profile(
    profile: Profile,
    gateway: ProfileGateway = Depends(get_gateway),
):
    """
    Replace the caller's whole profile row.
    The id comes from the token and the timestamps from the store,
    never from the body.
    """
    user_id = gateway.current_session_user_id()
    profile = profile.model_copy(update={"id": user_id, "created_at": 0, "last_active": 0})
    try:
        return await gateway.save_profile(profile)
    except StoreError as e:
        raise _to_http_error(e)


@router.post("/me/active", status_code=202)
async def touch_last_active(gateway: ProfileGateway = Depends(get_gateway)):
    """Refresh lastActive in the background"""
    gateway.touch_last_active()
    return {"status": "accepted"}


@router.get("/{user_id}", response_model=Profile)
async def get_profile(user_id: str, gateway: ProfileGateway = Depends(get_gateway)):
    try:
        return await gateway.fetch_profile(user_id)
    except StoreError as e:
        raise _to_http_error(e)
