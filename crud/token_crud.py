import logging
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from core.config import settings
from core.security import generate_token
from models.token import AccessToken

logger = logging.getLogger(__name__)


def get_token(db: Session, token: str):
    return db.query(AccessToken).filter(AccessToken.token == token).first()


def issue_token(db: Session, user_id: str, name: str = "Personal Access Token"):
    t = AccessToken(
        user_id=user_id,
        name=name,
        token=generate_token(),
        expires_at=datetime.now(timezone.utc) + timedelta(days=settings.TOKEN_TTL_DAYS),
    )
    db.add(t)
    db.commit()
    db.refresh(t)
    logger.info("Issued access token %s for user %s", t.id, user_id)
    return t


def revoke_token(db: Session, token: str) -> bool:
    t = get_token(db, token)
    if not t:
        return False
    token_id, user_id = t.id, t.user_id
    db.delete(t)
    db.commit()
    logger.info("Revoked access token %s for user %s", token_id, user_id)
    return True


def is_expired(t: AccessToken) -> bool:
    exp = t.expires_at
    if exp is None:
        return True
    if exp.tzinfo is None:
        exp = exp.replace(tzinfo=timezone.utc)
    return exp < datetime.now(timezone.utc)
