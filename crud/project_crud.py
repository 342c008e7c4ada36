import logging
from typing import Mapping
from sqlalchemy import and_, desc, func
from sqlalchemy.orm import Session, selectinload
from core.exceptions import ValidationError
from crud.attribute_crud import upsert_attributes
from crud.user_crud import get_users_by_ids
from models.attribute import Attribute
from models.project import Project
from models.user import User
from schemas.project_schema import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def _visible_to(actor: User):
    return Project.users.any(User.id == actor.id)


def get_project_for_member(db: Session, project_id: str, actor: User):
    """Return the project if ``actor`` is a member of it, otherwise ``None``."""
    return (
        db.query(Project)
        .options(selectinload(Project.users), selectinload(Project.attributes))
        .filter(Project.id == project_id, _visible_to(actor))
        .first()
    )


def list_projects(
    db: Session,
    actor: User,
    status: str | None = None,
    user_id: str | None = None,
    filters: Mapping[str, str] | None = None,
    page: int = 1,
    per_page: int = 15,
):
    """Projects visible to ``actor`` narrowed by the given filters.

    ``filters`` keys: ``name`` matches a case-insensitive substring of the
    project name, ``status`` and ``user_id`` are exact matches, and any other
    key names an attribute whose value must contain the given substring.
    Returns ``(items, total)`` for the requested page.
    """
    filters = dict(filters or {})
    status = filters.pop("status", None) or status
    user_id = filters.pop("user_id", None) or user_id

    q = db.query(Project).filter(_visible_to(actor))
    if status:
        q = q.filter(Project.status == status)
    if user_id:
        q = q.filter(Project.users.any(User.id == user_id))

    for key, value in filters.items():
        if key == "name":
            q = q.filter(func.lower(Project.name).contains(str(value).lower(), autoescape=True))
        else:
            q = q.filter(
                Project.attributes.any(
                    and_(Attribute.name == key, Attribute.value.contains(str(value), autoescape=True))
                )
            )

    total = q.count()
    items = (
        q.options(selectinload(Project.users), selectinload(Project.attributes))
        .order_by(desc(Project.created_at), Project.id)
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return items, total


def attach_users(db: Session, project: Project, user_ids, actor: User):
    """Add ``user_ids`` and the actor to the project's members."""
    for user in get_users_by_ids(db, [actor.id, *user_ids]):
        if user not in project.users:
            project.users.append(user)
    return project


def sync_users(db: Session, project: Project, user_ids, actor: User):
    """Make the members exactly ``user_ids`` plus the actor."""
    project.users = get_users_by_ids(db, [actor.id, *user_ids])
    return project


def set_attribute_value(db: Session, project: Project, name: str, value):
    attrs = upsert_attributes(db, project.id, {name: value})
    db.refresh(project)
    return attrs[0]


def create_project(db: Session, payload: ProjectCreate, actor: User):
    proj = Project(name=payload.name, description=payload.description, status=payload.status)
    db.add(proj)
    try:
        attach_users(db, proj, payload.user_ids, actor)
        db.flush()
        if payload.attributes:
            upsert_attributes(db, proj.id, payload.attributes, commit=False)
        db.commit()
    except ValidationError:
        db.rollback()
        raise
    db.refresh(proj)
    logger.info("User %s created project %s", actor.id, proj.id)
    return proj


def update_project(db: Session, project_id: str, payload: ProjectUpdate, actor: User):
    proj = get_project_for_member(db, project_id, actor)
    if not proj:
        return None
    fields = payload.model_dump(exclude_unset=True, exclude={"user_ids", "attributes"})
    for k, v in fields.items():
        if v is None and k != "description":
            continue
        setattr(proj, k, v)
    try:
        if payload.user_ids is not None:
            sync_users(db, proj, payload.user_ids, actor)
        db.flush()
        if payload.attributes:
            upsert_attributes(db, proj.id, payload.attributes, commit=False)
        db.commit()
    except ValidationError:
        db.rollback()
        raise
    db.refresh(proj)
    return proj


def delete_project(db: Session, project_id: str, actor: User) -> bool:
    proj = get_project_for_member(db, project_id, actor)
    if not proj:
        return False
    # Attributes and timesheets go with the project
    db.delete(proj)
    db.commit()
    logger.info("User %s deleted project %s", actor.id, project_id)
    return True
