"""Schema management for the object store."""

from objectstore.schema.manager import SchemaManager

__all__ = ["SchemaManager"]
