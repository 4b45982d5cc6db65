"""Lodge settings service: the single onboarding row."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.config import settings as app_settings
from lodgedesk.errors import ConflictError, SettingsNotFound
from lodgedesk.models.lodge_settings import LodgeSettings
from lodgedesk.schemas.lodge_settings import LodgeSettingsCreate, LodgeSettingsUpdate

logger = logging.getLogger(__name__)


async def get_lodge_settings(db: AsyncSession) -> LodgeSettings | None:
    result = await db.execute(select(LodgeSettings).order_by(LodgeSettings.created_at).limit(1))
    return result.scalar_one_or_none()


async def require_lodge_settings(db: AsyncSession) -> LodgeSettings:
    lodge = await get_lodge_settings(db)
    if lodge is None:
        raise SettingsNotFound()
    return lodge


async def get_lodge_name(db: AsyncSession) -> str:
    """Name used in guest messages, falling back to the configured default."""
    lodge = await get_lodge_settings(db)
    return lodge.name if lodge is not None else app_settings.default_lodge_name


async def create_lodge_settings(db: AsyncSession, data: LodgeSettingsCreate) -> LodgeSettings:
    """Store the onboarding settings. Only one row may exist."""
    if await get_lodge_settings(db) is not None:
        raise ConflictError("Lodge settings already exist; update them instead")

    lodge = LodgeSettings(**data.model_dump())
    db.add(lodge)
    await db.flush()
    await db.refresh(lodge)
    logger.info("Lodge settings created for %r", lodge.name)
    return lodge


async def update_lodge_settings(db: AsyncSession, data: LodgeSettingsUpdate) -> LodgeSettings:
    lodge = await require_lodge_settings(db)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "sms_template":
            continue
        setattr(lodge, field, value)
    await db.flush()
    await db.refresh(lodge)
    return lodge
