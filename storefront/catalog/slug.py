"""Slug and SEO field derivation.

Pure functions used to default ``slug``, ``seo_title`` and ``seo_desc``
when a create payload leaves them out.
"""

import re
import unicodedata

SLUG_MAX_LENGTH = 80
SEO_TITLE_MAX_LENGTH = 60
SEO_DESCRIPTION_MAX_LENGTH = 160

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


def slugify(text: str) -> str:
    """Turn a display name into a URL-safe slug.

    Lowercases, strips diacritics, replaces every run of characters
    outside ``[a-z0-9]`` with a single hyphen, trims hyphens at both ends
    and truncates to 80 characters.

    Example:
        >>> slugify("Suéteres!!")
        'sueteres'

    Args:
        text: Arbitrary input text.

    Returns:
        Slug, possibly empty.
    """
    decomposed = unicodedata.normalize("NFD", (text or "").lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_ALNUM_RE.sub("-", stripped).strip("-")
    # Truncation can expose a trailing hyphen.
    return slug[:SLUG_MAX_LENGTH].strip("-")


def is_valid_slug(slug: str) -> bool:
    """Check a slug against the ``^[a-z0-9-]+$`` pattern."""
    return bool(SLUG_PATTERN.match(slug))


def to_seo_title(name: str | None) -> str:
    """Trim a name and cut it to 60 characters."""
    return (name or "").strip()[:SEO_TITLE_MAX_LENGTH]


def to_seo_description(description: str | None) -> str:
    """Derive a plain-text SEO description from a (possibly HTML) body.

    Args:
        description: Product description, may contain markup.

    Returns:
        At most 160 characters of plain text, or ``""`` when absent.
    """
    if not description:
        return ""
    plain = _HTML_TAG_RE.sub("", description)
    plain = plain.replace("<", "").replace(">", "")
    plain = _WHITESPACE_RE.sub(" ", plain).strip()
    return plain[:SEO_DESCRIPTION_MAX_LENGTH]
