"""
Tests for the exposure policy.
"""
import pytest

from crudpipe.exposure import ALL_ROUTES, get_accessible_routes, is_route_accessible
from crudpipe.routing import RouteType


class TestGetAccessibleRoutes:
    def test_default_all(self):
        assert get_accessible_routes() == frozenset(ALL_ROUTES)
        assert len(get_accessible_routes(None, None, "all")) == 5

    def test_default_none(self):
        assert get_accessible_routes(None, None, "none") == frozenset()

    def test_only_replaces_baseline(self):
        routes = get_accessible_routes(only=[RouteType.READ_ALL, RouteType.READ_ONE])
        assert routes == {RouteType.READ_ALL, RouteType.READ_ONE}

    def test_only_with_none_strategy(self):
        routes = get_accessible_routes(only=[RouteType.CREATE], default_expose_strategy="none")
        assert routes == {RouteType.CREATE}

    def test_empty_only_exposes_nothing(self):
        assert get_accessible_routes(only=[], default_expose_strategy="all") == frozenset()

    def test_exclude_from_all(self):
        routes = get_accessible_routes(exclude=[RouteType.DELETE, RouteType.UPDATE])
        assert routes == {RouteType.READ_ALL, RouteType.READ_ONE, RouteType.CREATE}

    def test_exclude_wins_over_only(self):
        routes = get_accessible_routes(
            only=[RouteType.READ_ALL],
            exclude=[RouteType.READ_ALL],
            default_expose_strategy="all",
        )
        assert routes == frozenset()

    def test_exclude_with_none_strategy(self):
        assert get_accessible_routes(exclude=[RouteType.READ_ALL], default_expose_strategy="none") == frozenset()

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            get_accessible_routes(default_expose_strategy="some")

    def test_result_is_immutable(self):
        routes = get_accessible_routes()
        with pytest.raises(AttributeError):
            routes.add(RouteType.CREATE)


class TestIsRouteAccessible:
    def test_member(self):
        assert is_route_accessible(RouteType.READ_ONE, frozenset(ALL_ROUTES)) is True

    def test_not_member(self):
        routes = get_accessible_routes(exclude=[RouteType.DELETE])
        assert is_route_accessible(RouteType.DELETE, routes) is False

    def test_no_intent_never_accessible(self):
        assert is_route_accessible(None, frozenset(ALL_ROUTES)) is False
