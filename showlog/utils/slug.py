# showlog/utils/slug.py
import re
import unicodedata

from showlog.core.exceptions import ValidationError


def slugify(text: str | None) -> str:
    """
    Generate a URL-friendly slug from a display name.

    Examples:
        "The Fillmore" -> "the-fillmore"
        "Sigur Rós!!" -> "sigur-ros"
        "---" -> ""

    Returns an empty string when nothing alphanumeric survives; callers
    treat that as invalid input.
    """
    if not text:
        return ""

    # Transliterate unicode to ASCII (e.g., "Café" -> "Cafe")
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")

    # Any run of non-alphanumerics becomes one hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower())

    return slug.strip("-")


def require_slug(text: str | None, field: str) -> str:
    """Slugify ``text`` and reject the write when the slug comes out empty."""
    slug = slugify(text)
    if not slug:
        raise ValidationError(
            f"'{field}' must contain at least one letter or digit",
            details={"field": field, "value": text},
        )
    return slug
