"""
Entity schema registry.

Defines the Schema protocol the assigner depends on, and an in-memory
implementation keyed by entity name.
This is part of the functional core - no I/O, no ORM.
"""

from typing import Any, Protocol, runtime_checkable

from fieldmap_kernel.domain.records import Record
from fieldmap_kernel.domain.schemas.base import EntityDescriptor, FieldDescriptor
from fieldmap_kernel.exceptions import (
    EntityNotFoundError,
    SchemaAlreadyRegisteredError,
)
from fieldmap_kernel.logging_config import get_logger

logger = get_logger("domain.schema_registry")


@runtime_checkable
class Schema(Protocol):
    """Runtime metadata provider for entity types."""

    def describe(self, entity_name: str) -> EntityDescriptor:
        """Descriptor for an entity type. Raises EntityNotFoundError."""
        ...

    def new_record(self, entity_name: str) -> Any:
        """Empty record of the named entity type. Raises EntityNotFoundError."""
        ...


def describe_field(
    schema: Schema, entity_name: str, field_name: str
) -> FieldDescriptor:
    """
    Resolve one field's descriptor.

    Raises:
        EntityNotFoundError: Unknown entity type.
        FieldNotFoundError: Known entity, unknown field.
    """
    return schema.describe(entity_name).field(field_name)


class SchemaRegistry:
    """
    In-memory schema keyed by entity name.

    Provides:
    - Entity registration
    - Entity and field lookup
    - Empty record construction

    Usage:
        registry = SchemaRegistry()
        registry.register(EntityDescriptor("Account", fields=(...)))

        entity = registry.describe("Account")
        record = registry.new_record("Account")
    """

    def __init__(self, entities: tuple[EntityDescriptor, ...] = ()):
        self._entities: dict[str, EntityDescriptor] = {}
        for entity in entities:
            self.register(entity)

    def register(self, entity: EntityDescriptor) -> None:
        """
        Register an entity type.

        Raises:
            SchemaAlreadyRegisteredError: If the name is already taken.
        """
        if entity.name in self._entities:
            logger.warning(
                "schema_already_registered",
                extra={"entity_name": entity.name},
            )
            raise SchemaAlreadyRegisteredError(entity.name)

        self._entities[entity.name] = entity
        logger.info(
            "schema_registered",
            extra={
                "entity_name": entity.name,
                "field_count": len(entity.fields),
            },
        )

    def describe(self, entity_name: str) -> EntityDescriptor:
        """
        Get the descriptor for an entity type.

        Raises:
            EntityNotFoundError: If not registered.
        """
        entity = self._entities.get(entity_name)
        if entity is None:
            # Callers decide whether a miss is a diagnostic
            logger.debug(
                "schema_not_found",
                extra={"entity_name": entity_name},
            )
            raise EntityNotFoundError(entity_name)

        logger.debug("schema_lookup_hit", extra={"entity_name": entity_name})
        return entity

    def new_record(self, entity_name: str) -> Record:
        self.describe(entity_name)
        return Record(entity_name)

    def has_entity(self, entity_name: str) -> bool:
        return entity_name in self._entities

    def list_entities(self) -> list[str]:
        """List all registered entity names (sorted)."""
        return sorted(self._entities)

    def unregister(self, entity_name: str) -> None:
        self._entities.pop(entity_name, None)

    def clear(self) -> None:
        self._entities.clear()

    def __len__(self) -> int:
        return len(self._entities)
