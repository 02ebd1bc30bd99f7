"""
Target records.

A target record is anything keyed by field name: a mapping, an ORM instance,
or a plain object. The caller owns its lifecycle; nothing here copies or
retains it.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any


class Record(dict):
    """Generic record of a named entity type, keyed by field name."""

    def __init__(self, entity_name: str, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.entity_name = entity_name

    def __repr__(self) -> str:
        return f"Record({self.entity_name!r}, {dict.__repr__(self)})"


def write_field(record: Any, field_name: str, value: Any) -> None:
    """Set ``field_name`` on a mapping (item) or any other object (attribute)."""
    if isinstance(record, MutableMapping):
        record[field_name] = value
    else:
        setattr(record, field_name, value)


def read_field(record: Any, field_name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(field_name, default)
    return getattr(record, field_name, default)
