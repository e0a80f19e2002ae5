"""
Configuration Schemas for crudpipe.

Pydantic models for per-resource configuration and service settings.
"""

from __future__ import annotations

from functools import cached_property

from pydantic import BaseModel, ConfigDict, Field

from ..exposure import ExposeStrategy, get_accessible_routes
from ..pagination import PaginationConfig
from ..routing import RouteType


class ResourceConfig(BaseModel):
    """
    Configuration of one exposed resource.

    `accessible_routes` is computed once per config and treated as
    static for the resource's lifetime.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Route segment, e.g. 'users'")
    model: str | None = Field(None, description="Model name the resource maps to")
    only: list[RouteType] | None = Field(
        None, description="Allow-list of intents; replaces the default posture"
    )
    exclude: list[RouteType] | None = Field(
        None, description="Deny-list of intents, applied last"
    )
    default_expose_strategy: ExposeStrategy = "all"
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)

    @cached_property
    def accessible_routes(self) -> frozenset[RouteType]:
        return get_accessible_routes(
            self.only,
            self.exclude,
            self.default_expose_strategy,
        )

    @property
    def model_name(self) -> str:
        """Model name, defaulting to the route name."""
        return self.model or self.name


class CrudSettings(BaseModel):
    """
    Service settings.

    Loaded from CRUDPIPE_* environment variables by get_settings().
    """

    service_name: str = "crudpipe"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    api_prefix: str = Field("/api", description="Mount point of the CRUD router")
    default_per_page: int = Field(20, ge=1)
    default_expose_strategy: ExposeStrategy = "all"

    def resource(self, name: str, **overrides) -> ResourceConfig:
        """Build a ResourceConfig carrying these settings' defaults."""
        overrides.setdefault("default_expose_strategy", self.default_expose_strategy)
        overrides.setdefault("pagination", PaginationConfig(per_page=self.default_per_page))
        return ResourceConfig(name=name, **overrides)
