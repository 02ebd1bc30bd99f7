"""
Entity schema data structures.

Immutable descriptors for entity types and their fields, looked up at
runtime by name. This is part of the functional core - no I/O, no ORM.
"""

from dataclasses import dataclass, field
from enum import Enum

from fieldmap_kernel.exceptions import FieldNotFoundError


class FieldType(str, Enum):
    """Declared field types known to the platform."""

    # Converted before assignment
    DATETIME = "datetime"
    DATE = "date"
    CURRENCY = "currency"
    DOUBLE = "double"
    CHECKBOX = "checkbox"
    BOOLEAN = "boolean"

    # Stored as text
    STRING = "string"
    TEXTAREA = "textarea"
    PICKLIST = "picklist"
    MULTIPICKLIST = "multipicklist"
    REFERENCE = "reference"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    ID = "id"
    INTEGER = "integer"
    PERCENT = "percent"


def normalize_type_tag(declared: "FieldType | str") -> str:
    """
    Canonical lowercase tag for a declared type.

    Unknown tags are lowercased and passed through; they are never rejected.
    """
    if isinstance(declared, FieldType):
        return declared.value
    return str(declared).strip().lower()


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata for one field of one entity type."""

    name: str
    declared_type: str
    writable: bool = True
    description: str | None = None

    @property
    def type_tag(self) -> str:
        return normalize_type_tag(self.declared_type)


@dataclass(frozen=True)
class EntityDescriptor:
    """
    Metadata for an entity type: its name and its fields.

    Immutable and hashable. Field names are matched case-sensitively.
    """

    name: str
    fields: tuple[FieldDescriptor, ...]
    description: str = ""

    _fields_by_name: dict[str, FieldDescriptor] = field(
        default_factory=dict, init=False, compare=False, hash=False, repr=False
    )

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("entity name is required")
        by_name: dict[str, FieldDescriptor] = {}
        for f in self.fields:
            if f.name in by_name:
                raise ValueError(
                    f"Duplicate field '{f.name}' on entity '{self.name}'"
                )
            by_name[f.name] = f
        # Use object.__setattr__ to bypass frozen dataclass
        object.__setattr__(self, "_fields_by_name", by_name)

    def has_field(self, name: str) -> bool:
        return name in self._fields_by_name

    def field(self, name: str) -> FieldDescriptor:
        """
        Get a field descriptor by name.

        Raises:
            FieldNotFoundError: If the entity has no such field.
        """
        try:
            return self._fields_by_name[name]
        except KeyError:
            raise FieldNotFoundError(self.name, name) from None

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)
