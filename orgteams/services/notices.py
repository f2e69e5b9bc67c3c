from typing import Iterable, List, Optional
from uuid import uuid4

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgteams.models import Notice, NoticeLevel, NoticeRead


async def save_notices(
    session: AsyncSession,
    messages: Iterable[str],
    level: NoticeLevel = NoticeLevel.ERROR,
) -> Optional[str]:
    """Store ``messages`` under a fresh one-shot token and return the token.

    Returns None when there is nothing to store.
    """
    messages = [message for message in messages if message]
    if not messages:
        return None

    token = uuid4().hex
    session.add_all([Notice(token=token, level=level, message=message) for message in messages])
    await session.commit()
    return token


async def pop_notices(session: AsyncSession, token: Optional[str]) -> List[NoticeRead]:
    """Return the notices stored under ``token`` and delete them."""
    if not token:
        return []

    statement = select(Notice).where(Notice.token == token).order_by(Notice.id)
    result = await session.exec(statement)
    stored = result.all()

    notices = [NoticeRead(level=notice.level, message=notice.message) for notice in stored]
    for notice in stored:
        await session.delete(notice)
    if stored:
        await session.commit()
    return notices
