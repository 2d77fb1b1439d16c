"""Query parameter normalization for list endpoints.

Turns untrusted ``page``/``perPage``/``sort``/``dir`` strings into a
bounded :class:`ListParams`. Normalization never raises: anything out of
range or outside an allow-list falls back to the endpoint default.
"""

import math
from dataclasses import dataclass

from storefront.infrastructure.config import settings

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = frozenset({SORT_ASC, SORT_DESC})

# Largest OFFSET a signed 64-bit SQL integer holds.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class ListSpec:
    """Per-endpoint defaults and allow-lists.

    Attributes:
        sort_keys: Accepted values for ``sort``.
        default_sort: Sort key used when the request gives none or an unknown one.
        default_dir: Direction used when ``dir`` is absent or unknown.
        per_page_default: Page size when ``perPage`` is absent or unparsable.
        per_page_max: Upper clamp for ``perPage``.
    """

    sort_keys: frozenset[str]
    default_sort: str
    default_dir: str
    per_page_default: int
    per_page_max: int


@dataclass(frozen=True)
class ListParams:
    """Normalized pagination and sort parameters.

    Attributes:
        page: Page number (1-indexed).
        per_page: Items per page.
        sort: Sort key from the endpoint allow-list.
        dir: Sort direction ("asc" or "desc").
    """

    page: int
    per_page: int
    sort: str
    dir: str

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Get limit (alias for per_page)."""
        return self.per_page

    @property
    def descending(self) -> bool:
        return self.dir == SORT_DESC


ADMIN_PRODUCTS = ListSpec(
    sort_keys=frozenset({"name", "price", "stock", "status", "updatedAt"}),
    default_sort="updatedAt",
    default_dir=SORT_DESC,
    per_page_default=settings.admin_per_page_default,
    per_page_max=settings.admin_per_page_max,
)

ADMIN_CATEGORIES = ListSpec(
    sort_keys=frozenset({"name", "slug", "count"}),
    default_sort="name",
    default_dir=SORT_ASC,
    per_page_default=settings.admin_per_page_default,
    per_page_max=settings.admin_per_page_max,
)

# Storefront sort keys carry their own direction; ``dir`` is informational.
STOREFRONT_PRODUCTS = ListSpec(
    sort_keys=frozenset({"featured", "newest", "price-asc", "price-desc", "name"}),
    default_sort="featured",
    default_dir=SORT_DESC,
    per_page_default=settings.store_per_page_default,
    per_page_max=settings.store_per_page_max,
)


def parse_int(raw: str | None) -> int | None:
    """Parse a numeric query string, flooring fractional values.

    Args:
        raw: Raw query parameter value.

    Returns:
        Parsed integer, or None when absent, blank or not a finite number.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return math.floor(value)


def normalize_list_params(
    spec: ListSpec,
    page: str | None = None,
    per_page: str | None = None,
    sort: str | None = None,
    dir: str | None = None,
) -> ListParams:
    """Normalize raw list query parameters against an endpoint spec.

    Args:
        spec: Endpoint defaults and allow-lists.
        page: Raw ``page`` value.
        per_page: Raw ``perPage`` value.
        sort: Raw ``sort`` value.
        dir: Raw ``dir`` value.

    Returns:
        Bounded, usable list parameters.
    """
    parsed_per_page = parse_int(per_page)
    if parsed_per_page is None:
        parsed_per_page = spec.per_page_default
    normalized_per_page = min(spec.per_page_max, max(1, parsed_per_page))

    parsed_page = parse_int(page)
    normalized_page = max(1, parsed_page) if parsed_page is not None else 1
    normalized_page = min(normalized_page, MAX_OFFSET // normalized_per_page + 1)

    sort_key = (sort or "").strip()
    if sort_key not in spec.sort_keys:
        sort_key = spec.default_sort

    direction = (dir or "").strip().lower()
    if direction not in SORT_DIRECTIONS:
        direction = spec.default_dir

    return ListParams(
        page=normalized_page,
        per_page=normalized_per_page,
        sort=sort_key,
        dir=direction,
    )
