from datetime import datetime
from pydantic import BaseModel, Field, StrictStr, field_validator
from models.project import ProjectStatus
from schemas.attribute_schema import AttributeResponse
from schemas.user_schema import UserResponse


class ProjectBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus


class ProjectCreate(ProjectBase):
    """Client payload for creating a project. The creator is always a member."""
    user_ids: list[str]
    attributes: dict[str, StrictStr] | None = None

    @field_validator("user_ids")
    @classmethod
    def check_user_ids(cls, value):
        if not value:
            raise ValueError("Please assign at least one user to the project.")
        return value


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus | None = None
    user_ids: list[str] | None = None
    attributes: dict[str, StrictStr] | None = None


class ProjectSummary(BaseModel):
    id: str
    name: str
    status: ProjectStatus

    model_config = {"from_attributes": True}


class ProjectResponse(ProjectBase):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    users: list[UserResponse] = []
    attributes: list[AttributeResponse] = []

    model_config = {"from_attributes": True}
