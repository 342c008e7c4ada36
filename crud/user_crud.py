import logging
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.exceptions import ValidationError
from core.security import hash_password
from models.user import User
from schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def get_users_by_ids(db: Session, user_ids) -> list[User]:
    """Return the users for ``user_ids``; raise if any id is unknown."""
    wanted = list(dict.fromkeys(user_ids))
    if not wanted:
        return []
    users = db.query(User).filter(User.id.in_(wanted)).all()
    if len(users) != len(wanted):
        raise ValidationError({"user_ids": ["One or more selected users do not exist."]})
    by_id = {u.id: u for u in users}
    return [by_id[i] for i in wanted]


def create_user(db: Session, payload: UserCreate):
    errors: dict[str, list[str]] = {}
    if payload.password_confirmation != payload.password:
        errors["password"] = ["The password confirmation does not match."]
    if get_user_by_email(db, payload.email):
        errors["email"] = ["The email has already been taken."]
    if errors:
        raise ValidationError(errors)

    user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError({"email": ["The email has already been taken."]})
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user
