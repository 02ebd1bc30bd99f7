"""
fieldmap_ingestion -- Metadata-driven field assignment.

Converts raw text values to the declared type of a target field and writes
them into records. Where the values come from, how mappings are configured
and how records are saved are left to the caller.
"""

from fieldmap_ingestion.mapping import FieldAssigner

__all__ = ["FieldAssigner"]
