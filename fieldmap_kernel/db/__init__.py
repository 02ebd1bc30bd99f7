"""SQLAlchemy integration: schema provider over declarative models."""

from fieldmap_kernel.db.orm_schema import OrmSchema, column_type_tag, describe_mapper

__all__ = ["OrmSchema", "column_type_tag", "describe_mapper"]
