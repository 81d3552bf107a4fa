"""
Input helpers shared by repositories and services.
"""

import re
import unicodedata

from hospeda_shared.config.constants import Limits


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in LIKE patterns.

    SQL LIKE uses % and _ as wildcards. This function escapes them
    so free-text search terms match literally.

    Args:
        value: The search string to escape

    Returns:
        The escaped string safe for use in LIKE patterns (escape char: backslash)
    """
    if not value:
        return value

    # Escape the escape character first, then the wildcards
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")
    return value


_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(*parts: str) -> str:
    """
    Build a URL slug from one or more text parts.

    Accents are folded to ASCII, anything that is not a letter or digit
    becomes a single hyphen.

        slugify("Hotel Río Uruguay")  -> "hotel-rio-uruguay"
        slugify("FESTIVAL", "Carnaval", "2025-02-01") -> "festival-carnaval-2025-02-01"
    """
    text = " ".join(str(part) for part in parts if part)
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", normalized.lower()).strip("-")
    return slug[: Limits.MAX_SLUG_LENGTH].rstrip("-")
