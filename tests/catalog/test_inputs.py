"""Tests for catalog mutation payloads."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from storefront.catalog.inputs import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    normalize_tags,
    parse_decimal,
)
from storefront.catalog.models import ProductStatus


class TestParseDecimal:
    """Tests for price parsing."""

    def test_string_input(self) -> None:
        """Strings are parsed exactly."""
        assert parse_decimal("49.99") == Decimal("49.99")

    def test_float_input_is_exact(self) -> None:
        """Floats go through their shortest repr, not the binary expansion."""
        assert parse_decimal(49.99) == Decimal("49.99")

    def test_int_input(self) -> None:
        """Integers are accepted."""
        assert parse_decimal(20) == Decimal("20")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("49.999", "50.00"), ("49.995", "50.00"), ("49.994", "49.99"), ("7", "7.00")],
    )
    def test_rounds_to_cents(self, raw: str, expected: str) -> None:
        """Extra fractional digits are rounded half-up to two places."""
        assert parse_decimal(raw) == Decimal(expected)
        assert parse_decimal(raw).as_tuple().exponent == -2

    def test_decimal_input_is_rounded(self) -> None:
        """Decimal values are rounded like strings."""
        assert parse_decimal(Decimal("1.005")) == Decimal("1.01")

    @pytest.mark.parametrize("value", [True, "abc", "NaN", "Infinity", "1e30", [1]])
    def test_rejected(self, value) -> None:
        """Booleans, non-numbers and non-finite values are rejected."""
        with pytest.raises(ValueError):
            parse_decimal(value)


class TestNormalizeTags:
    """Tests for tag normalization."""

    def test_trims_lowercases_and_dedupes(self) -> None:
        """Tags are cleaned and de-duplicated in first-seen order."""
        assert normalize_tags([" Verano ", "verano", "Algodón", "", "  "]) == [
            "verano",
            "algodón",
        ]


class TestProductCreate:
    """Tests for the product create payload."""

    def test_minimal_payload(self) -> None:
        """Only name and price are required."""
        data = ProductCreate.model_validate({"name": " Hoodie ", "price": "49.99"})
        assert data.name == "Hoodie"
        assert data.price == Decimal("49.99")
        assert data.status == ProductStatus.DRAFT
        assert data.stock == 0
        assert data.slug is None
        assert data.tags == []

    def test_camel_case_fields(self) -> None:
        """Wire names are camelCase."""
        data = ProductCreate.model_validate(
            {
                "name": "Hoodie",
                "price": 49.99,
                "compareAt": "59.99",
                "seoTitle": " Hoodie ",
                "seoDesc": "Warm hoodie",
            }
        )
        assert data.compare_at == Decimal("59.99")
        assert data.seo_title == "Hoodie"
        assert data.seo_desc == "Warm hoodie"

    def test_blank_slug_means_derive(self) -> None:
        """A blank slug is treated as absent."""
        data = ProductCreate.model_validate({"name": "Hoodie", "price": "1", "slug": "  "})
        assert data.slug is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"price": "10"},
            {"name": "", "price": "10"},
            {"name": "Hoodie"},
            {"name": "Hoodie", "price": "-1"},
            {"name": "Hoodie", "price": "10", "compareAt": "0"},
            {"name": "Hoodie", "price": "10", "stock": -1},
            {"name": "Hoodie", "price": "10", "stock": 2**31},
            {"name": "Hoodie", "price": "10", "tags": ["x" * 101]},
            {"name": "Hoodie", "price": "12345678901.00"},
            {"name": "Hoodie", "price": "10", "status": "deleted"},
            {"name": "Hoodie", "price": "10", "slug": "Not A Slug"},
            {"name": "Hoodie", "price": "10", "slug": "x" * 81},
            {"name": "Hoodie", "price": "10", "seoTitle": "x" * 61},
            {"name": "Hoodie", "price": "10", "seoDesc": "x" * 161},
        ],
    )
    def test_invalid_payloads(self, payload: dict) -> None:
        """Invalid payloads are rejected as a whole."""
        with pytest.raises(ValidationError):
            ProductCreate.model_validate(payload)

    def test_price_with_extra_decimals_is_rounded(self) -> None:
        """Prices are stored in cents rather than rejected."""
        data = ProductCreate.model_validate({"name": "Hoodie", "price": "49.999"})
        assert data.price == Decimal("50.00")

    def test_limits_are_inclusive(self) -> None:
        """The largest stock and the longest tag are accepted."""
        data = ProductCreate.model_validate(
            {"name": "Hoodie", "price": "10", "stock": 2**31 - 1, "tags": ["x" * 100]}
        )
        assert data.stock == 2**31 - 1
        assert data.tags == ["x" * 100]

    def test_categories_are_deduplicated(self) -> None:
        """Repeated category ids collapse to one link."""
        data = ProductCreate.model_validate(
            {"name": "Hoodie", "price": "10", "categories": ["a", "b", "a"]}
        )
        assert data.categories == ["a", "b"]


class TestProductUpdate:
    """Tests for the partial product update payload."""

    def test_only_sent_fields_are_changes(self) -> None:
        """Fields left out are not part of the change set."""
        data = ProductUpdate.model_validate({"price": "12.50"})
        assert data.changes() == {"price": Decimal("12.50")}

    def test_empty_body_changes_nothing(self) -> None:
        """An empty body is a no-op update."""
        assert ProductUpdate.model_validate({}).changes() == {}

    def test_nullable_fields_can_be_cleared(self) -> None:
        """Description and compareAt accept null to clear them."""
        data = ProductUpdate.model_validate({"compareAt": None, "description": None})
        assert data.changes() == {"compare_at": None, "description": None}

    @pytest.mark.parametrize("field", ["name", "price", "status", "stock", "slug", "tags"])
    def test_null_rejected_for_required_fields(self, field: str) -> None:
        """Null is not a valid value for required fields."""
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate({field: None})

    def test_empty_slug_rejected(self) -> None:
        """An update cannot blank the slug."""
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate({"slug": " "})

    @pytest.mark.parametrize("payload", [{"stock": 2**31}, {"tags": ["x" * 101]}])
    def test_column_limits_enforced(self, payload: dict) -> None:
        """Values the columns cannot hold are rejected on update too."""
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate(payload)

    def test_tags_are_normalized(self) -> None:
        """Tags on update follow the create rules."""
        data = ProductUpdate.model_validate({"tags": ["Verano", "verano "]})
        assert data.changes() == {"tags": ["verano"]}


class TestCategoryPayloads:
    """Tests for category payloads."""

    def test_create(self) -> None:
        """Names are trimmed; slug is optional."""
        data = CategoryCreate.model_validate({"name": "  Hoodies "})
        assert data.name == "Hoodies"
        assert data.slug is None

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"name": "A"},
            {"name": "Hoodies", "slug": "Bad Slug"},
            {"name": "Hoodies", "slug": "h"},
        ],
    )
    def test_create_rejected(self, payload: dict) -> None:
        """Short names and malformed slugs are rejected."""
        with pytest.raises(ValidationError):
            CategoryCreate.model_validate(payload)

    def test_update_is_partial(self) -> None:
        """Only sent fields are changes."""
        assert CategoryUpdate.model_validate({"slug": "hoodies"}).changes() == {
            "slug": "hoodies"
        }

    def test_update_rejects_one_character_slug(self) -> None:
        """Category slugs need at least two characters."""
        with pytest.raises(ValidationError):
            CategoryUpdate.model_validate({"slug": "h"})

    def test_update_rejects_null(self) -> None:
        """Category fields cannot be cleared."""
        with pytest.raises(ValidationError):
            CategoryUpdate.model_validate({"name": None})
