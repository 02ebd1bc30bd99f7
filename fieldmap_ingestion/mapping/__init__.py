"""Mapping: converter table and field assignment."""

from fieldmap_ingestion.mapping.assigner import FieldAssigner
from fieldmap_ingestion.mapping.engine import (
    CONVERTERS,
    Converter,
    convert,
    converter_for,
)

__all__ = [
    "CONVERTERS",
    "Converter",
    "FieldAssigner",
    "convert",
    "converter_for",
]
