"""
crudpipe FastAPI integration.
"""

from .main import configure_logging, create_app
from .router import create_crud_router, to_starlette_response

__all__ = [
    "configure_logging",
    "create_app",
    "create_crud_router",
    "to_starlette_response",
]
