"""Staff account lookup and bootstrap."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lodgedesk.auth.passwords import hash_password, verify_password
from lodgedesk.models.user import User

logger = logging.getLogger(__name__)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def authenticate(db: AsyncSession, username: str, password: str) -> User | None:
    """Return the user when the credentials match, else ``None``."""
    user = await get_user_by_username(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def ensure_admin_user(db: AsyncSession, username: str, password: str) -> User:
    """Create the bootstrap staff account if it does not exist yet."""
    user = await get_user_by_username(db, username)
    if user is not None:
        return user

    user = User(username=username, hashed_password=hash_password(password), is_active=True)
    db.add(user)
    await db.flush()
    logger.info("Created staff account %r", username)
    return user
