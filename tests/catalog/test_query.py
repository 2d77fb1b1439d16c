"""Tests for list query parameter normalization."""

import pytest

from storefront.catalog.query import (
    ADMIN_CATEGORIES,
    ADMIN_PRODUCTS,
    STOREFRONT_PRODUCTS,
    MAX_OFFSET,
    ListParams,
    normalize_list_params,
    parse_int,
)


class TestParseInt:
    """Tests for numeric query parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("3", 3),
            (" 7 ", 7),
            ("2.9", 2),
            ("-4", -4),
            ("1e2", 100),
        ],
    )
    def test_numeric(self, raw: str, expected: int) -> None:
        """Numbers are parsed and floored."""
        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "nan", "inf", "-inf"])
    def test_not_a_finite_number(self, raw: str | None) -> None:
        """Anything else is treated as absent."""
        assert parse_int(raw) is None


class TestNormalizeListParams:
    """Tests for normalize_list_params."""

    def test_admin_product_defaults(self) -> None:
        """Absent parameters use the endpoint defaults."""
        params = normalize_list_params(ADMIN_PRODUCTS)
        assert params == ListParams(page=1, per_page=10, sort="updatedAt", dir="desc")

    def test_admin_category_defaults(self) -> None:
        """Category lists default to name ascending."""
        params = normalize_list_params(ADMIN_CATEGORIES)
        assert params.sort == "name"
        assert params.dir == "asc"

    def test_storefront_defaults(self) -> None:
        """The storefront defaults to twelve featured products."""
        params = normalize_list_params(STOREFRONT_PRODUCTS)
        assert params.per_page == 12
        assert params.sort == "featured"

    @pytest.mark.parametrize("page", ["0", "-3", "abc", "", "nan"])
    def test_invalid_page_falls_back_to_first(self, page: str) -> None:
        """Pages below one or unparsable pages become page 1."""
        assert normalize_list_params(ADMIN_PRODUCTS, page=page).page == 1

    def test_fractional_page_is_floored(self) -> None:
        """Fractional pages are floored."""
        assert normalize_list_params(ADMIN_PRODUCTS, page="2.7").page == 2

    @pytest.mark.parametrize("page", ["1e20", "99999999999999999999", "1e300"])
    def test_huge_page_keeps_offset_in_range(self, page: str) -> None:
        """Very large pages are capped so the offset fits a 64-bit integer."""
        params = normalize_list_params(ADMIN_PRODUCTS, page=page)
        assert params.page > 1
        assert 0 <= params.offset <= MAX_OFFSET

    def test_per_page_is_clamped_to_admin_max(self) -> None:
        """Oversized admin pages are clamped to 100."""
        assert normalize_list_params(ADMIN_PRODUCTS, per_page="1000").per_page == 100

    def test_per_page_is_clamped_to_storefront_max(self) -> None:
        """Oversized storefront pages are clamped to 48."""
        assert normalize_list_params(STOREFRONT_PRODUCTS, per_page="1000").per_page == 48

    @pytest.mark.parametrize(("raw", "expected"), [("0", 1), ("-5", 1), ("abc", 10)])
    def test_per_page_lower_bound_and_fallback(self, raw: str, expected: int) -> None:
        """Non-positive sizes clamp to one; unparsable ones use the default."""
        assert normalize_list_params(ADMIN_PRODUCTS, per_page=raw).per_page == expected

    def test_unknown_sort_falls_back(self) -> None:
        """Sort keys outside the allow-list use the default."""
        params = normalize_list_params(ADMIN_PRODUCTS, sort="password")
        assert params.sort == "updatedAt"

    def test_known_sort_is_kept(self) -> None:
        """Allowed sort keys pass through."""
        assert normalize_list_params(ADMIN_CATEGORIES, sort="count").sort == "count"
        assert normalize_list_params(STOREFRONT_PRODUCTS, sort="price-asc").sort == "price-asc"

    def test_direction_is_case_insensitive(self) -> None:
        """Directions are matched without regard to case."""
        assert normalize_list_params(ADMIN_PRODUCTS, dir="ASC").dir == "asc"

    def test_unknown_direction_falls_back(self) -> None:
        """Unknown directions use the default."""
        assert normalize_list_params(ADMIN_PRODUCTS, dir="sideways").dir == "desc"


class TestListParams:
    """Tests for ListParams helpers."""

    def test_offset_and_limit(self) -> None:
        """Offset skips the earlier pages."""
        params = ListParams(page=3, per_page=10, sort="name", dir="asc")
        assert params.offset == 20
        assert params.limit == 10
        assert not params.descending
