"""
Service layer for bookmark CRUD operations.

Every function is scoped by ``user_id``. Edits and deletes are single
conditional statements (``WHERE id = ? AND user_id = ?``); an affected-row
count of zero means the bookmark doesn't exist or belongs to someone else, and
both cases raise the same AccessDeniedError.
"""
import logging
from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """Create a bookmark owned by ``user_id``."""
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        link=data.link,
        description=data.description,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def get_bookmarks(db: AsyncSession, user_id: int) -> Sequence[Bookmark]:
    """Get all bookmarks for a user in insertion order."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id),
    )
    return result.scalars().all()


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | None:
    """Get a bookmark by ID, or None if missing or owned by another user."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one_or_none()


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply a sparse update to a bookmark owned by ``user_id``.

    Raises:
        AccessDeniedError: If the bookmark doesn't exist or isn't owned by the user.
    """
    update_data = data.model_dump(exclude_unset=True)
    if update_data:
        result = await db.execute(
            update(Bookmark)
            .where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id)
            .values(**update_data),
        )
        if result.rowcount == 0:
            logger.info("User %s denied update of bookmark %s", user_id, bookmark_id)
            raise AccessDeniedError(bookmark_id)
        await db.flush()

    bookmark = await get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        # Empty patch on a bookmark the user can't see
        logger.info("User %s denied update of bookmark %s", user_id, bookmark_id)
        raise AccessDeniedError(bookmark_id)
    return bookmark


async def delete_bookmark(db: AsyncSession, user_id: int, bookmark_id: int) -> None:
    """
    Delete a bookmark owned by ``user_id``.

    Raises:
        AccessDeniedError: If the bookmark doesn't exist or isn't owned by the user.
    """
    result = await db.execute(
        delete(Bookmark)
        .where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id),
    )
    if result.rowcount == 0:
        logger.info("User %s denied delete of bookmark %s", user_id, bookmark_id)
        raise AccessDeniedError(bookmark_id)
    await db.flush()
