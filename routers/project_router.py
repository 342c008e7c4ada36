from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.config import settings
from core.database import get_db
from core.exceptions import NotFoundOrForbidden
from crud.project_crud import list_projects, get_project_for_member, create_project, update_project, delete_project
from models.project import ProjectStatus
from schemas.page_schema import Page
from schemas.project_schema import ProjectCreate, ProjectResponse, ProjectUpdate


router = APIRouter(prefix="/projects", tags=["Projects"])


def _bracket_filters(request: Request) -> dict[str, str]:
    """Collect ``filters[key]=value`` query parameters into a dict."""
    filters = {}
    for key, value in request.query_params.multi_items():
        if key.startswith("filters[") and key.endswith("]") and len(key) > len("filters[]"):
            filters[key[len("filters["):-1]] = value
    return filters


@router.get("", response_model=Page[ProjectResponse])
def list_all(
    request: Request,
    status: ProjectStatus | None = None,
    user_id: str | None = None,
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    per_page = settings.PROJECTS_PER_PAGE
    items, total = list_projects(
        db,
        current_user,
        status=status.value if status else None,
        user_id=user_id,
        filters=_bracket_filters(request),
        page=page,
        per_page=per_page,
    )
    return Page.build([ProjectResponse.model_validate(p) for p in items], total, page, per_page)


@router.get("/{project_id}", response_model=ProjectResponse)
def read_one(project_id: str, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    proj = get_project_for_member(db, project_id, current_user)
    if not proj:
        raise NotFoundOrForbidden("Project not found.")
    return proj


@router.post("", response_model=ProjectResponse, status_code=201)
def create(payload: ProjectCreate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    return create_project(db, payload, actor=current_user)


@router.api_route("/{project_id}", methods=["PUT", "PATCH"], response_model=ProjectResponse)
def update(project_id: str, payload: ProjectUpdate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    proj = update_project(db, project_id, payload, actor=current_user)
    if not proj:
        raise NotFoundOrForbidden("Project not found.")
    return proj


@router.delete("/{project_id}", status_code=204)
def delete(project_id: str, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    ok = delete_project(db, project_id, actor=current_user)
    if not ok:
        raise NotFoundOrForbidden("Project not found.")
    return None
