from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from core.database import Base, SessionLocal, engine
from crud.attribute_crud import create_attribute
from crud.project_crud import create_project
from crud.timesheet_crud import create_timesheet
from crud.user_crud import create_user, get_user_by_email
from models import user, token, project, attribute, timesheet  # noqa: F401
from schemas.attribute_schema import AttributeCreate
from schemas.project_schema import ProjectCreate
from schemas.timesheet_schema import TimesheetCreate
from schemas.user_schema import UserCreate

DEMO_EMAIL = "test@example.com"
DEMO_PASSWORD = "password"


def _typed_attributes(project_id: str, department: str, start: date, budget: int) -> list[AttributeCreate]:
    return [
        AttributeCreate(
            project_id=project_id,
            name="department",
            type="select",
            options=["IT", "HR", "Finance", "Marketing", "Sales", "Operations"],
            value=department,
        ),
        AttributeCreate(project_id=project_id, name="start_date", type="date", value=start.isoformat()),
        AttributeCreate(
            project_id=project_id, name="end_date", type="date", value=(start + timedelta(days=90)).isoformat()
        ),
        AttributeCreate(project_id=project_id, name="budget", type="number", value=budget),
        AttributeCreate(
            project_id=project_id,
            name="priority",
            type="select",
            options=["Low", "Medium", "High", "Critical"],
            value="Medium",
        ),
    ]


def seed(db) -> None:
    if get_user_by_email(db, DEMO_EMAIL):
        print(f"SKIP: {DEMO_EMAIL} already exists")
        return

    demo = create_user(
        db,
        UserCreate(
            first_name="Test",
            last_name="User",
            email=DEMO_EMAIL,
            password=DEMO_PASSWORD,
            password_confirmation=DEMO_PASSWORD,
        ),
    )

    website = create_project(db, ProjectCreate(name="Website Redesign", status="active", user_ids=[demo.id]), actor=demo)
    hr_system = create_project(
        db, ProjectCreate(name="HR System Implementation", status="on_hold", user_ids=[demo.id]), actor=demo
    )

    for attr in _typed_attributes(website.id, "IT", date(2024, 3, 1), 50000):
        create_attribute(db, attr)
    for attr in _typed_attributes(hr_system.id, "HR", date(2024, 4, 1), 75000):
        create_attribute(db, attr)

    entries = [
        (website.id, "Frontend Development", date(2024, 3, 2), 8),
        (website.id, "Backend API", date(2024, 3, 3), 6),
        (hr_system.id, "Requirements Analysis", date(2024, 3, 2), 4),
    ]
    for project_id, task, day, hours in entries:
        create_timesheet(db, TimesheetCreate(project_id=project_id, task_name=task, date=day, hours=hours), actor=demo)


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
    print(f"OK: Seeded database -> {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
