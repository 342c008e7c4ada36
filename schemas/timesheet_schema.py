from datetime import date as date_type, datetime
from pydantic import BaseModel, Field, field_validator
from schemas.project_schema import ProjectSummary
from schemas.user_schema import UserResponse


def _not_in_future(value: date_type | None) -> date_type | None:
    if value is not None and value > date_type.today():
        raise ValueError("Cannot log time for future dates.")
    return value


class TimesheetCreate(BaseModel):
    project_id: str
    task_name: str = Field(min_length=1, max_length=255)
    date: date_type
    hours: float = Field(ge=0.5, le=24)

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return _not_in_future(value)


class TimesheetUpdate(BaseModel):
    project_id: str | None = None
    task_name: str | None = Field(default=None, min_length=1, max_length=255)
    date: date_type | None = None
    hours: float | None = Field(default=None, ge=0.5, le=24)

    @field_validator("date")
    @classmethod
    def check_date(cls, value):
        return _not_in_future(value)


class TimesheetResponse(BaseModel):
    id: str
    user_id: str
    project_id: str
    task_name: str
    date: date_type
    hours: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserResponse | None = None
    project: ProjectSummary | None = None

    model_config = {"from_attributes": True}
