import logging
from typing import Optional

from jose import jwt, JWTError
from fastapi import Header, HTTPException
from sqlmodel import SQLModel

from orgteams.config import FEATURE_ORG_BILLING, SESSION_JWT_SECRET
from orgteams.models import LoggedInUser

logger = logging.getLogger(__name__)


class Features(SQLModel):
    org_billing: bool = False


def get_features() -> Features:
    return Features(org_billing=FEATURE_ORG_BILLING)


async def get_current_user(
    authorization: Optional[str] = Header(None),
) -> Optional[LoggedInUser]:
    """Read the caller from the session token issued upstream.

    Anonymous requests carry no ``Authorization`` header and yield None.
    """
    if authorization is None:
        return None

    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")

    token = authorization.split(" ")[1]

    try:
        payload = jwt.decode(
            token,
            SESSION_JWT_SECRET,
            algorithms=["HS256"],
            options={"verify_aud": False}
        )
    except JWTError as e:
        logger.warning("JWT decode error: %s", e)
        raise HTTPException(status_code=401, detail="Invalid token")

    name = payload.get("name") or payload.get("sub")
    if not name:
        raise HTTPException(status_code=401, detail="Token carries no user name")

    return LoggedInUser(name=name, email=payload.get("email"))
