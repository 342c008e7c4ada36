import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from core.database import get_db
from core.exceptions import AuthenticationError
from crud.token_crud import get_token, is_expired

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_current_token(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    token = _extract_bearer_token(authorization)
    if not token:
        raise AuthenticationError()

    t = get_token(db, token)
    if not t:
        logger.warning("Rejected unknown bearer token")
        raise AuthenticationError()

    if is_expired(t):
        logger.warning("Rejected expired token %s", t.id)
        raise AuthenticationError()

    return t


def get_current_user(t = Depends(get_current_token)):
    user = t.user
    if not user:
        raise AuthenticationError()
    return user
