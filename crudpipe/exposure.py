"""
Exposure Policy for crudpipe.

Computes which CRUD intents a resource actually exposes from an
allow-list, a deny-list and a default posture.
"""
from __future__ import annotations

from typing import Iterable, Literal

from .routing import RouteType

ExposeStrategy = Literal["all", "none"]

ALL_ROUTES: tuple[RouteType, ...] = (
    RouteType.READ_ALL,
    RouteType.READ_ONE,
    RouteType.UPDATE,
    RouteType.DELETE,
    RouteType.CREATE,
)


def get_accessible_routes(
    only: Iterable[RouteType] | None = None,
    exclude: Iterable[RouteType] | None = None,
    default_expose_strategy: ExposeStrategy = "all",
) -> frozenset[RouteType]:
    """
    Compute the set of intents a resource exposes.

    An explicit `only` (even empty) replaces the default posture;
    `exclude` is always applied last.

    Raises:
        ValueError: If default_expose_strategy is not "all" or "none"
    """
    if default_expose_strategy == "all":
        accessible = set(ALL_ROUTES)
    elif default_expose_strategy == "none":
        accessible = set()
    else:
        raise ValueError(
            f"default_expose_strategy must be 'all' or 'none', got {default_expose_strategy!r}"
        )

    if only is not None:
        accessible = set(only)

    if exclude:
        accessible.difference_update(exclude)

    return frozenset(accessible)


def is_route_accessible(
    route_type: RouteType | None,
    accessible: frozenset[RouteType],
) -> bool:
    """Check a classified intent against an accessible set."""
    return route_type is not None and route_type in accessible
