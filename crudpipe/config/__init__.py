"""
crudpipe Configuration

Pydantic schemas for resources and environment-driven settings.
"""

from .schemas import CrudSettings, ResourceConfig
from .settings import get_settings, reset_settings

__all__ = [
    "CrudSettings",
    "ResourceConfig",
    "get_settings",
    "reset_settings",
]
