import uuid
from sqlalchemy import Column, String, Date, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin

class Timesheet(Base, TimestampMixin):
    __tablename__ = "timesheets"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    task_name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    hours = Column(Float, nullable=False)

    user = relationship("User", back_populates="timesheets")
    project = relationship("Project", back_populates="timesheets")

Index("idx_timesheets_user_id_date", Timesheet.user_id, Timesheet.date.desc())
Index("idx_timesheets_project_id", Timesheet.project_id)
