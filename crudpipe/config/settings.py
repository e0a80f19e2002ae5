"""
Settings loading for crudpipe.

Reads CrudSettings from CRUDPIPE_* environment variables.
"""
from __future__ import annotations

import os
from functools import lru_cache

from .schemas import CrudSettings


@lru_cache()
def get_settings() -> CrudSettings:
    """
    Get service settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return CrudSettings(
        service_name=os.getenv("CRUDPIPE_SERVICE_NAME", "crudpipe"),
        environment=os.getenv("CRUDPIPE_ENVIRONMENT", "development"),
        debug=os.getenv("CRUDPIPE_DEBUG", "false").lower() == "true",
        log_level=os.getenv("CRUDPIPE_LOG_LEVEL", "INFO").upper(),
        api_prefix=os.getenv("CRUDPIPE_API_PREFIX", "/api"),
        default_per_page=int(os.getenv("CRUDPIPE_DEFAULT_PER_PAGE", "20")),
        default_expose_strategy=os.getenv("CRUDPIPE_DEFAULT_EXPOSE_STRATEGY", "all"),
    )


def reset_settings() -> None:
    """Drop cached settings so the environment is read again (for testing)."""
    get_settings.cache_clear()
