"""
Entity schema module.

Provides entity/field descriptors and the schema lookup protocol.
"""

from fieldmap_kernel.domain.schemas.base import (
    EntityDescriptor,
    FieldDescriptor,
    FieldType,
    normalize_type_tag,
)
from fieldmap_kernel.domain.schemas.registry import (
    Schema,
    SchemaRegistry,
    describe_field,
)

__all__ = [
    "EntityDescriptor",
    "FieldDescriptor",
    "FieldType",
    "Schema",
    "SchemaRegistry",
    "describe_field",
    "normalize_type_tag",
]
