"""
crudpipe Data Adapters

The storage side of CRUD dispatch.
"""

from .base import DataAdapter, InvalidBodyError, ResourceId
from .memory import InMemoryDataAdapter

__all__ = [
    "DataAdapter",
    "InMemoryDataAdapter",
    "InvalidBodyError",
    "ResourceId",
]
