"""
Tests for pagination options.
"""
import pytest
from pydantic import ValidationError

from crudpipe.pagination import (
    InvalidPaginationError,
    PaginationConfig,
    PaginationOptions,
    ParsedQueryParams,
    apply_pagination_options,
    build_pagination_metadata,
    get_pagination_options,
)


@pytest.fixture
def config() -> PaginationConfig:
    return PaginationConfig(per_page=20)


class TestGetPaginationOptions:
    def test_page_and_limit(self, config):
        options = get_pagination_options(ParsedQueryParams(page=2, limit=10), config)
        assert options == PaginationOptions(page=2, per_page=10)

    def test_limit_defaults_to_config(self, config):
        options = get_pagination_options(ParsedQueryParams(page=3), config)
        assert options == PaginationOptions(page=3, per_page=20)

    def test_no_page_means_unpaginated(self, config):
        assert get_pagination_options(ParsedQueryParams(), config) is None

    def test_limit_without_page_is_unpaginated(self, config):
        assert get_pagination_options(ParsedQueryParams(limit=5), config) is None

    @pytest.mark.parametrize("page", [0, -1])
    def test_non_positive_page(self, config, page):
        with pytest.raises(InvalidPaginationError) as exc_info:
            get_pagination_options(ParsedQueryParams(page=page), config)

        assert exc_info.value.page == page
        assert "strictly positive" in str(exc_info.value)

    def test_invalid_pagination_is_value_error(self, config):
        with pytest.raises(ValueError):
            get_pagination_options(ParsedQueryParams(page=0), config)

    def test_zero_limit_falls_back_to_config(self, config):
        options = get_pagination_options(ParsedQueryParams(page=1, limit=0), config)
        assert options.per_page == 20

    def test_negative_limit_falls_back_to_config(self, config):
        query = ParsedQueryParams.model_construct(page=2, limit=-5)

        options = get_pagination_options(query, config)
        apply_pagination_options(query, options)

        assert options == PaginationOptions(page=2, per_page=20)
        assert query.skip == 20
        assert build_pagination_metadata(45, options)["page_count"] == 3


class TestApplyPaginationOptions:
    def test_sets_skip_and_limit(self, config):
        query = ParsedQueryParams(page=2, limit=10)
        options = get_pagination_options(query, config)

        apply_pagination_options(query, options)

        assert query.skip == 10
        assert query.limit == 10

    def test_first_page_skips_nothing(self):
        query = ParsedQueryParams(page=1)
        apply_pagination_options(query, PaginationOptions(page=1, per_page=25))

        assert query.skip == 0
        assert query.limit == 25


class TestParsedQueryParams:
    def test_coerces_strings(self):
        query = ParsedQueryParams.model_validate({"page": "2", "limit": "5"})
        assert query.page == 2
        assert query.limit == 5

    def test_keeps_extra_params(self):
        query = ParsedQueryParams.model_validate({"page": "1", "include": "posts"})
        assert query.model_extra == {"include": "posts"}

    @pytest.mark.parametrize("field", ["limit", "skip"])
    def test_rejects_negative_offsets(self, field):
        with pytest.raises(ValidationError):
            ParsedQueryParams.model_validate({"page": "2", field: "-5"})

    def test_rejects_non_numeric_page(self):
        with pytest.raises(ValidationError):
            ParsedQueryParams.model_validate({"page": "two"})


class TestPaginationConfig:
    def test_default(self):
        assert PaginationConfig().per_page == 20

    def test_per_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            PaginationConfig(per_page=0)


class TestPaginationMetadata:
    def test_page_count_rounds_up(self):
        meta = build_pagination_metadata(21, PaginationOptions(page=2, per_page=10))
        assert meta == {"total": 21, "page_count": 3, "page": 2}

    def test_empty_collection(self):
        meta = build_pagination_metadata(0, PaginationOptions(page=1, per_page=10))
        assert meta["page_count"] == 0
