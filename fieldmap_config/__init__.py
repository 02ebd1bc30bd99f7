"""
fieldmap_config -- entity definitions from YAML.

Builds a SchemaRegistry from entity definition files. The definitions
bundled under ``entities/`` describe a small CRM object model and are used
when no directory is given.
"""

from __future__ import annotations

from pathlib import Path

from fieldmap_config.loader import compute_checksum, load_schema, load_yaml_file
from fieldmap_kernel.domain.schemas.registry import SchemaRegistry

_DEFAULT_ENTITY_DIR = Path(__file__).parent / "entities"


def load_default_schema(entity_dir: Path | None = None) -> SchemaRegistry:
    """Registry with every entity defined under ``entity_dir``."""
    return load_schema(entity_dir or _DEFAULT_ENTITY_DIR)


__all__ = [
    "compute_checksum",
    "load_default_schema",
    "load_schema",
    "load_yaml_file",
]
