from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.config import settings
from core.database import get_db
from core.exceptions import NotFoundOrForbidden
from crud.timesheet_crud import list_timesheets, get_timesheet_for_owner, create_timesheet, update_timesheet, delete_timesheet
from schemas.page_schema import Page
from schemas.timesheet_schema import TimesheetCreate, TimesheetResponse, TimesheetUpdate


router = APIRouter(prefix="/timesheets", tags=["Timesheets"])


@router.get("", response_model=Page[TimesheetResponse])
def list_all(
    user_id: str | None = None,
    project_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    per_page = settings.TIMESHEETS_PER_PAGE
    items, total = list_timesheets(
        db,
        current_user,
        user_id=user_id,
        project_id=project_id,
        date_from=date_from,
        date_to=date_to,
        page=page,
        per_page=per_page,
    )
    return Page.build([TimesheetResponse.model_validate(t) for t in items], total, page, per_page)


@router.get("/{timesheet_id}", response_model=TimesheetResponse)
def read_one(timesheet_id: str, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    ts = get_timesheet_for_owner(db, timesheet_id, current_user)
    if not ts:
        raise NotFoundOrForbidden("Timesheet not found.")
    return ts


@router.post("", response_model=TimesheetResponse, status_code=201)
def create(payload: TimesheetCreate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    return create_timesheet(db, payload, actor=current_user)


@router.api_route("/{timesheet_id}", methods=["PUT", "PATCH"], response_model=TimesheetResponse)
def update(timesheet_id: str, payload: TimesheetUpdate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    ts = update_timesheet(db, timesheet_id, payload, actor=current_user)
    if not ts:
        raise NotFoundOrForbidden("Timesheet not found.")
    return ts


@router.delete("/{timesheet_id}", status_code=204)
def delete(timesheet_id: str, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    ok = delete_timesheet(db, timesheet_id, actor=current_user)
    if not ok:
        raise NotFoundOrForbidden("Timesheet not found.")
    return None
