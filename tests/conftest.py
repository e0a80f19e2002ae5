"""
Pytest configuration and fixtures for crudpipe tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from crudpipe import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from crudpipe.adapters import InMemoryDataAdapter  # noqa: E402
from crudpipe.config import ResourceConfig  # noqa: E402
from crudpipe.pipeline import MiddlewareContext  # noqa: E402


@pytest.fixture
def ctx() -> MiddlewareContext:
    """Fresh middleware context for each test."""
    return MiddlewareContext()


@pytest.fixture
def users_config() -> ResourceConfig:
    return ResourceConfig(name="users", model="User")


@pytest.fixture
def adapter() -> InMemoryDataAdapter:
    """Adapter seeded with three users (ids 1..3)."""
    adapter = InMemoryDataAdapter()
    adapter.seed(
        "User",
        [
            {"name": "Ada"},
            {"name": "Grace"},
            {"name": "Linus"},
        ],
    )
    return adapter
