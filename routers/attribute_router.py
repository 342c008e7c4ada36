from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.database import get_db
from core.exceptions import NotFoundOrForbidden
from crud.attribute_crud import list_attributes, get_attribute, create_attribute, update_attribute, delete_attribute
from schemas.attribute_schema import AttributeCreate, AttributeListResponse, AttributeResponse, AttributeUpdate


router = APIRouter(prefix="/attributes", tags=["Attributes"])


@router.get("", response_model=AttributeListResponse)
def list_all(project_id: str | None = None, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    return {"data": list_attributes(db, project_id=project_id, actor=current_user)}


@router.get("/{attribute_id}", response_model=AttributeResponse)
def read_one(attribute_id: int, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    attr = get_attribute(db, attribute_id, actor=current_user)
    if not attr:
        raise NotFoundOrForbidden("Attribute not found.")
    return attr


@router.post("", response_model=AttributeResponse, status_code=201)
def create(payload: AttributeCreate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    return create_attribute(db, payload, actor=current_user)


@router.api_route("/{attribute_id}", methods=["PUT", "PATCH"], response_model=AttributeResponse)
def update(attribute_id: int, payload: AttributeUpdate, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    attr = update_attribute(db, attribute_id, payload, actor=current_user)
    if not attr:
        raise NotFoundOrForbidden("Attribute not found.")
    return attr


@router.delete("/{attribute_id}", status_code=204)
def delete(attribute_id: int, db: Session = Depends(get_db), current_user = Depends(get_current_user)):
    ok = delete_attribute(db, attribute_id, actor=current_user)
    if not ok:
        raise NotFoundOrForbidden("Attribute not found.")
    return None
