"""
Entity Definition Loader (``fieldmap_config.loader``).

Responsibility
--------------
Loads YAML entity definition files and parses them into
``fieldmap_kernel`` descriptors registered in a ``SchemaRegistry``.

File format
-----------
::

    entities:
      Opportunity:
        description: Sales deal
        fields:
          Name: {type: string}
          CloseDate: {type: date}
          IsClosed: {type: boolean, writable: false}

Failure modes
-------------
Loading configuration is NOT a contained operation; errors propagate:

* Missing YAML file  -> ``FileNotFoundError``.
* Malformed YAML  -> ``yaml.YAMLError``.
* Field without ``type``  -> ``KeyError``.
* ``writable`` that is not a boolean  -> ``ValueError``.
* Duplicate entity across files  -> ``SchemaAlreadyRegisteredError``.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from fieldmap_kernel.domain.schemas.base import EntityDescriptor, FieldDescriptor
from fieldmap_kernel.domain.schemas.registry import SchemaRegistry
from fieldmap_kernel.logging_config import get_logger

logger = get_logger("config.loader")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_field(name: str, data: dict[str, Any]) -> FieldDescriptor:
    """
    Parse a FieldDescriptor from a dict. ``type`` is required.

    Raises:
        KeyError: if ``type`` is missing.
        ValueError: if ``writable`` is not a YAML boolean (a quoted
            "false" must not turn a read-only field writable).
    """
    writable = data.get("writable", True)
    if not isinstance(writable, bool):
        raise ValueError(
            f"Field '{name}': writable must be true or false, got {writable!r}"
        )
    return FieldDescriptor(
        name=name,
        declared_type=str(data["type"]),
        writable=writable,
        description=data.get("description"),
    )


def parse_entity(name: str, data: dict[str, Any]) -> EntityDescriptor:
    fields = data.get("fields") or {}
    return EntityDescriptor(
        name=name,
        fields=tuple(parse_field(fname, fdata or {}) for fname, fdata in fields.items()),
        description=data.get("description", ""),
    )


def _yaml_files(path: Path) -> list[Path]:
    if path.is_dir():
        return sorted([*path.glob("*.yaml"), *path.glob("*.yml")])
    return [path]


def load_schema(
    paths: str | Path | Iterable[str | Path],
    registry: SchemaRegistry | None = None,
) -> SchemaRegistry:
    """
    Load entity definitions into a registry.

    ``paths`` may be a single file, a directory of ``*.yaml`` files, or an
    iterable of either. Files are read in sorted order.
    """
    registry = registry if registry is not None else SchemaRegistry()
    if isinstance(paths, (str, Path)):
        paths = [paths]

    for path in paths:
        for yaml_path in _yaml_files(Path(path)):
            data = load_yaml_file(yaml_path)
            entities = data.get("entities") or {}
            for name, entity_data in entities.items():
                registry.register(parse_entity(name, entity_data or {}))
            logger.info(
                "entity_definitions_loaded",
                extra={
                    "path": str(yaml_path),
                    "entity_count": len(entities),
                    "checksum": compute_checksum(data),
                },
            )

    return registry


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums, regardless of
    key order in the source file.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
