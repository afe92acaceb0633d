"""Service layer for user profile operations."""
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by ID."""
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one_or_none()


async def update_user(db: AsyncSession, user_id: int, data: UserUpdate) -> User | None:
    """
    Apply a sparse profile update to the user's own record.

    Only fields present in ``data`` are written. Returns None if the user no
    longer exists.
    """
    update_data = data.model_dump(exclude_unset=True)
    if update_data:
        await db.execute(
            update(User).where(User.id == user_id).values(**update_data),
        )
        await db.flush()
    return await get_user(db, user_id)
