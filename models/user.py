import uuid
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from models.base import Base, TimestampMixin

class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    projects = relationship("Project", secondary="project_user", back_populates="users")
    timesheets = relationship("Timesheet", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    tokens = relationship("AccessToken", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
