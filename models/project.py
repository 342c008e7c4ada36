import enum
import uuid
from sqlalchemy import Column, String, Text, Enum, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin


class ProjectStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"


project_user = Table(
    "project_user",
    Base.metadata,
    Column("project_id", String(64), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(64), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Project(Base, TimestampMixin):
    __tablename__ = "projects"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(ProjectStatus, values_callable=lambda e: [m.value for m in e], native_enum=False, length=32),
        nullable=False,
        default=ProjectStatus.ACTIVE,
    )

    users = relationship("User", secondary=project_user, back_populates="projects")
    attributes = relationship(
        "Attribute",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Attribute.id",
    )
    timesheets = relationship("Timesheet", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)

    def find_attribute(self, name: str):
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def get_attribute_value(self, name: str) -> str | None:
        attribute = self.find_attribute(name)
        return attribute.value if attribute is not None else None

Index("idx_project_user_user_id", project_user.c.user_id)
