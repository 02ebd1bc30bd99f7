"""
Module: fieldmap_kernel.db.orm_schema
Responsibility: Schema provider backed by SQLAlchemy declarative models.
    Entity types are mapped classes (looked up by class name); field
    descriptors are derived from the mapper's column attributes.
Architecture position: Kernel > DB.  Implements the domain Schema protocol;
    the domain layer never imports from here.

Type tags:
    DateTime -> datetime, Date -> date, Numeric/Float -> double,
    Boolean -> boolean, Integer -> integer, Enum -> picklist,
    String/Text -> string.  Anything else becomes the lowercased type class
    name, which the assigner stores as text.
    ``Column(..., info={"field_type": "currency"})`` overrides the tag.

Writability:
    A column attribute is NOT writable when it is a primary key, a
    ``Computed`` column, a SQL expression (``column_property``), or carries
    ``info={"writable": False}``.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    Integer,
    Numeric,
    String,
    inspect,
)
from sqlalchemy.orm import DeclarativeBase, Mapper
from sqlalchemy.types import TypeDecorator, TypeEngine

from fieldmap_kernel.domain.schemas.base import (
    EntityDescriptor,
    FieldDescriptor,
    FieldType,
)
from fieldmap_kernel.exceptions import EntityNotFoundError
from fieldmap_kernel.logging_config import get_logger

logger = get_logger("db.orm_schema")

# Checked in order: Enum before String, DateTime before Date (neither
# subclasses the other, but keep the specific types first).
_TYPE_TAGS: tuple[tuple[type[TypeEngine], FieldType], ...] = (
    (DateTime, FieldType.DATETIME),
    (Date, FieldType.DATE),
    (Boolean, FieldType.BOOLEAN),
    # Float is not a Numeric subclass on every SQLAlchemy 2.x release
    (Float, FieldType.DOUBLE),
    (Numeric, FieldType.DOUBLE),
    (Integer, FieldType.INTEGER),
    (Enum, FieldType.PICKLIST),
    (String, FieldType.STRING),
)


def column_type_tag(column_type: TypeEngine) -> str:
    """Type tag for a SQLAlchemy column type."""
    if isinstance(column_type, TypeDecorator):
        column_type = column_type.impl_instance
    for sa_type, tag in _TYPE_TAGS:
        if isinstance(column_type, sa_type):
            return tag.value
    return type(column_type).__name__.lower()


def _describe_column(key: str, column: Any) -> FieldDescriptor:
    info = getattr(column, "info", {}) or {}
    declared = info.get("field_type") or column_type_tag(column.type)

    writable = (
        isinstance(column, Column)
        and not column.primary_key
        and column.computed is None
        and info.get("writable", True) is not False
    )

    return FieldDescriptor(
        name=key,
        declared_type=str(declared),
        writable=writable,
        description=column.doc if isinstance(column, Column) else None,
    )


def describe_mapper(mapper: Mapper) -> EntityDescriptor:
    """Build an EntityDescriptor from a mapper's column attributes."""
    fields = tuple(
        _describe_column(prop.key, prop.columns[0])
        for prop in mapper.column_attrs
    )
    cls = mapper.class_
    return EntityDescriptor(
        name=cls.__name__,
        fields=fields,
        description=(cls.__doc__ or "").strip(),
    )


class OrmSchema:
    """
    Schema over a set of mapped classes.

    Descriptors are built on first lookup and cached.  Concurrent first
    lookups build equal descriptors, so the cache needs no lock.

    Usage:
        schema = OrmSchema.from_base(Base)
        record = schema.new_record("Opportunity")
        schema.describe("Opportunity").field("CloseDate").type_tag  # "date"
    """

    def __init__(self, models: Iterable[type]):
        self._models: dict[str, type] = {cls.__name__: cls for cls in models}
        self._cache: dict[str, EntityDescriptor] = {}

    @classmethod
    def from_base(cls, base: type[DeclarativeBase]) -> "OrmSchema":
        """Schema over every class mapped by a declarative base's registry."""
        return cls(mapper.class_ for mapper in base.registry.mappers)

    def _model(self, entity_name: str) -> type:
        model = self._models.get(entity_name)
        if model is None:
            logger.debug("schema_not_found", extra={"entity_name": entity_name})
            raise EntityNotFoundError(entity_name)
        return model

    def describe(self, entity_name: str) -> EntityDescriptor:
        """
        Descriptor for a mapped class.

        Raises:
            EntityNotFoundError: No mapped class with that name.
        """
        cached = self._cache.get(entity_name)
        if cached is not None:
            return cached

        entity = describe_mapper(inspect(self._model(entity_name)))
        self._cache[entity_name] = entity
        logger.debug(
            "orm_entity_described",
            extra={"entity_name": entity_name, "field_count": len(entity.fields)},
        )
        return entity

    def new_record(self, entity_name: str) -> Any:
        """Transient instance of the mapped class (not added to a session)."""
        return self._model(entity_name)()

    def list_entities(self) -> list[str]:
        return sorted(self._models)
