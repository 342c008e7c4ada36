import logging
from typing import Mapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.attribute_types import AttributeType, coerce_type, validate_attribute
from core.exceptions import DuplicateNameError, ValidationError
from models.attribute import Attribute
from models.project import Project
from models.user import User
from schemas.attribute_schema import AttributeCreate, AttributeUpdate

logger = logging.getLogger(__name__)


def _member_of_project(actor: User):
    return Attribute.project.has(Project.users.any(User.id == actor.id))


def get_attribute(db: Session, attribute_id: int, actor: User | None = None):
    """Return the attribute, or ``None`` if it is missing or ``actor`` is not a member of its project."""
    q = db.query(Attribute).filter(Attribute.id == attribute_id)
    if actor is not None:
        q = q.filter(_member_of_project(actor))
    return q.first()


def find_attribute_by_project_and_name(db: Session, project_id: str, name: str):
    return (
        db.query(Attribute)
        .filter(Attribute.project_id == project_id, Attribute.name == name)
        .first()
    )


def list_attributes(db: Session, project_id: str | None = None, actor: User | None = None):
    q = db.query(Attribute)
    if actor is not None:
        q = q.filter(_member_of_project(actor))
    if project_id is not None:
        q = q.filter(Attribute.project_id == project_id)
    return q.order_by(Attribute.id).all()


def _name_taken(db: Session, project_id: str, name: str, exclude_id: int | None = None) -> bool:
    q = db.query(Attribute.id).filter(Attribute.project_id == project_id, Attribute.name == name)
    if exclude_id is not None:
        q = q.filter(Attribute.id != exclude_id)
    return db.query(q.exists()).scalar()


def _check_name(name) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError({"name": ["Attribute name is required."]})
    if len(name) > 255:
        raise ValidationError({"name": ["Attribute name may not be greater than 255 characters."]})


def _flush(db: Session, name: str) -> None:
    # The unique (project_id, name) constraint is the final word on duplicates
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.warning("Attribute name %r collided at flush time", name)
        raise DuplicateNameError(name)


def _add_attribute(db: Session, project_id: str, name: str, type_, value, options=None) -> Attribute:
    _check_name(name)
    taken = _name_taken(db, project_id, name)
    try:
        attr_type, stored, options = validate_attribute(type_, value, options)
    except ValidationError as exc:
        if taken:
            raise ValidationError({**exc.errors, **DuplicateNameError(name).errors})
        raise
    if taken:
        logger.warning("Attribute name %r already exists in project %s", name, project_id)
        raise DuplicateNameError(name)

    attr = Attribute(project_id=project_id, name=name, type=attr_type, value=stored, options=options)
    db.add(attr)
    _flush(db, name)
    return attr


def _merge_errors(errors: dict[str, list[str]], check, *args) -> None:
    try:
        check(*args)
    except ValidationError as exc:
        for field, messages in exc.errors.items():
            errors.setdefault(field, []).extend(messages)


def _project_exists(db: Session, project_id: str, actor: User | None) -> bool:
    q = db.query(Project.id).filter(Project.id == project_id)
    if actor is not None:
        q = q.filter(Project.users.any(User.id == actor.id))
    return db.query(q.exists()).scalar()


def create_attribute(db: Session, payload: AttributeCreate, actor: User | None = None):
    if not _project_exists(db, payload.project_id, actor):
        errors = {"project_id": ["Selected project does not exist."]}
        _merge_errors(errors, _check_name, payload.name)
        _merge_errors(errors, validate_attribute, payload.type, payload.value, payload.options)
        raise ValidationError(errors)
    try:
        attr = _add_attribute(db, payload.project_id, payload.name, payload.type, payload.value, payload.options)
        db.commit()
    except ValidationError:
        db.rollback()
        raise
    db.refresh(attr)
    logger.info("Created %s attribute %r on project %s", attr.type.value, attr.name, attr.project_id)
    return attr


def update_attribute(db: Session, attribute_id: int, payload: AttributeUpdate, actor: User | None = None):
    attr = get_attribute(db, attribute_id, actor)
    if not attr:
        return None
    fields = payload.model_dump(exclude_unset=True)

    name = fields.get("name") or attr.name
    _check_name(name)
    if name != attr.name and _name_taken(db, attr.project_id, name, exclude_id=attr.id):
        logger.warning("Attribute name %r already exists in project %s", name, attr.project_id)
        raise DuplicateNameError(name)

    attr_type = coerce_type(fields.get("type") or attr.type)
    if "options" in fields:
        options = fields["options"]
    elif attr_type is AttributeType.SELECT:
        # None when switching into select without options, which fails below
        options = attr.options
    else:
        options = None
    value = fields["value"] if "value" in fields else attr.value

    attr_type, stored, options = validate_attribute(attr_type, value, options)

    attr.name = name
    attr.type = attr_type
    attr.value = stored
    attr.options = options
    try:
        _flush(db, name)
        db.commit()
    except ValidationError:
        db.rollback()
        raise
    db.refresh(attr)
    return attr


def delete_attribute(db: Session, attribute_id: int, actor: User | None = None) -> bool:
    attr = get_attribute(db, attribute_id, actor)
    if not attr:
        return False
    name, project_id = attr.name, attr.project_id
    db.delete(attr)
    db.commit()
    logger.info("Deleted attribute %r from project %s", name, project_id)
    return True


def set_attribute_value(db: Session, project_id: str, name: str, value) -> Attribute:
    """Create-or-update a single attribute by ``(project_id, name)``.

    An existing attribute only has its value replaced; its type and options
    stay as they are and the new value is validated against them. A missing
    attribute is created as a ``string`` attribute. Flushes, does not commit.
    """
    attr = find_attribute_by_project_and_name(db, project_id, name)
    if attr is None:
        return _add_attribute(db, project_id, name, AttributeType.STRING, value)

    _, stored, _ = validate_attribute(attr.type, value, attr.options)
    attr.value = stored
    _flush(db, name)
    return attr


def upsert_attributes(db: Session, project_id: str, values: Mapping[str, str], commit: bool = True) -> list[Attribute]:
    """Apply a ``{name: value}`` map to a project's attributes in one transaction.

    Keys are processed in the order given. The first failing key aborts the
    batch: everything done in the current transaction is rolled back and a
    ``ValidationError`` keyed ``attributes.<name>`` is raised.
    """
    applied = []
    try:
        for name, value in values.items():
            try:
                applied.append(set_attribute_value(db, project_id, name, value))
            except ValidationError as exc:
                messages = [m for msgs in exc.errors.values() for m in msgs]
                raise ValidationError({f"attributes.{name}": messages})
        if commit:
            db.commit()
    except ValidationError:
        db.rollback()
        raise
    return applied
