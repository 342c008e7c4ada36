import logging
from datetime import date
from sqlalchemy import desc
from sqlalchemy.orm import Session, selectinload
from core.exceptions import ValidationError
from crud.project_crud import get_project_for_member
from models.project import Project
from models.timesheet import Timesheet
from models.user import User
from schemas.timesheet_schema import TimesheetCreate, TimesheetUpdate

logger = logging.getLogger(__name__)


def get_timesheet(db: Session, timesheet_id: str):
    return db.query(Timesheet).filter(Timesheet.id == timesheet_id).first()


def get_timesheet_for_owner(db: Session, timesheet_id: str, actor: User):
    return (
        db.query(Timesheet)
        .options(selectinload(Timesheet.user), selectinload(Timesheet.project))
        .filter(Timesheet.id == timesheet_id, Timesheet.user_id == actor.id)
        .first()
    )


def list_timesheets(
    db: Session,
    actor: User,
    user_id: str | None = None,
    project_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    page: int = 1,
    per_page: int = 10,
):
    # Only entries logged against projects the actor belongs to
    q = db.query(Timesheet).filter(Timesheet.project.has(Project.users.any(User.id == actor.id)))
    if user_id:
        q = q.filter(Timesheet.user_id == user_id)
    if project_id:
        q = q.filter(Timesheet.project_id == project_id)
    if date_from:
        q = q.filter(Timesheet.date >= date_from)
    if date_to:
        q = q.filter(Timesheet.date <= date_to)

    total = q.count()
    items = (
        q.options(selectinload(Timesheet.user), selectinload(Timesheet.project))
        .order_by(desc(Timesheet.date), desc(Timesheet.created_at), Timesheet.id)
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return items, total


def _check_project(db: Session, project_id: str, actor: User) -> None:
    if get_project_for_member(db, project_id, actor) is None:
        raise ValidationError({"project_id": ["Selected project does not exist."]})


def create_timesheet(db: Session, payload: TimesheetCreate, actor: User):
    _check_project(db, payload.project_id, actor)
    ts = Timesheet(
        user_id=actor.id,
        project_id=payload.project_id,
        task_name=payload.task_name,
        date=payload.date,
        hours=payload.hours,
    )
    db.add(ts)
    db.commit()
    db.refresh(ts)
    logger.info("User %s logged %.2fh on project %s", actor.id, ts.hours, ts.project_id)
    return ts


def update_timesheet(db: Session, timesheet_id: str, payload: TimesheetUpdate, actor: User):
    ts = get_timesheet_for_owner(db, timesheet_id, actor)
    if not ts:
        return None
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("project_id") and fields["project_id"] != ts.project_id:
        _check_project(db, fields["project_id"], actor)
    for k, v in fields.items():
        if v is not None:
            setattr(ts, k, v)
    db.commit()
    db.refresh(ts)
    return ts


def delete_timesheet(db: Session, timesheet_id: str, actor: User) -> bool:
    ts = get_timesheet_for_owner(db, timesheet_id, actor)
    if not ts:
        return False
    db.delete(ts)
    db.commit()
    return True
