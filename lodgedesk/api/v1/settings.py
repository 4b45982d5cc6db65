"""Lodge settings API router: onboarding and later edits."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.api.deps import get_current_active_user, get_db
from lodgedesk.models.lodge_settings import LodgeSettings
from lodgedesk.models.user import User
from lodgedesk.schemas.lodge_settings import (
    LodgeSettingsCreate,
    LodgeSettingsResponse,
    LodgeSettingsUpdate,
)
from lodgedesk.services import settings_service

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("", response_model=LodgeSettingsResponse, summary="Get lodge settings")
async def get_settings(db: AsyncSession = Depends(get_db)) -> LodgeSettings:
    """Public so the front end can tell whether onboarding is done. 404 before onboarding."""
    return await settings_service.require_lodge_settings(db)


@router.post(
    "",
    response_model=LodgeSettingsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create lodge settings",
)
async def create_settings(
    body: LodgeSettingsCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> LodgeSettings:
    """Store the onboarding settings. Raises 409 if they already exist."""
    return await settings_service.create_lodge_settings(db, body)


@router.put("", response_model=LodgeSettingsResponse, summary="Update lodge settings")
async def update_settings(
    body: LodgeSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> LodgeSettings:
    return await settings_service.update_lodge_settings(db, body)
