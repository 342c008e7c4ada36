from sqlalchemy import Column, Integer, String, Enum, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from core.attribute_types import AttributeType, parse_value
from models.base import Base, TimestampMixin

class Attribute(Base, TimestampMixin):
    __tablename__ = "attributes"
    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_attributes_project_id_name"),
    )

    # Integer key so that ordering by id follows insertion order
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(
        Enum(AttributeType, values_callable=lambda e: [m.value for m in e], native_enum=False, length=16),
        nullable=False,
    )
    value = Column(String(255), nullable=True)
    options = Column(JSON, nullable=True)

    project = relationship("Project", back_populates="attributes")

    @property
    def typed_value(self):
        """The stored value parsed according to ``type``."""
        if self.value is None:
            return None
        return parse_value(self.type, self.value)
