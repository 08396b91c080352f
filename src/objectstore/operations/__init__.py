"""Store operations module.

This module provides separate operation classes for querying, inserting,
and updating records.
"""

from objectstore.operations.insert import InsertOperations
from objectstore.operations.query import QueryOperations
from objectstore.operations.update import UpdateOperations

__all__ = ["InsertOperations", "QueryOperations", "UpdateOperations"]
