import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from orgteams.auth.dependencies import Features, get_current_user, get_features
from orgteams.db.database import get_session
from orgteams.models import LoggedInUser, NoticeRead
from orgteams.services.notices import pop_notices

REQUEST_LOGGER = "orgteams.request"


@dataclass
class RequestContext:
    """Everything a handler needs about the current request besides its inputs."""

    session: AsyncSession
    features: Features
    logged_in_user: Optional[LoggedInUser] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(REQUEST_LOGGER))
    notices: List[NoticeRead] = field(default_factory=list)

    @property
    def user_name(self) -> Optional[str]:
        return self.logged_in_user.name if self.logged_in_user else None


async def get_request_context(
    request: Request,
    user: Optional[LoggedInUser] = Depends(get_current_user),
    features: Features = Depends(get_features),
    session: AsyncSession = Depends(get_session),
) -> RequestContext:
    token = request.query_params.get("notice")
    try:
        notices = await pop_notices(session, token)
    except SQLAlchemyError as err:
        logging.getLogger(REQUEST_LOGGER).error("Could not resolve notice %s: %s", token, err)
        await session.rollback()
        notices = []
    # Views pick these up when rendering.
    request.state.notices = notices
    return RequestContext(
        session=session,
        features=features,
        logged_in_user=user,
        notices=notices,
    )
