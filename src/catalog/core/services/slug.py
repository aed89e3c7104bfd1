"""URL slug generation for product names."""

import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Turn a display name into a lowercase, hyphenated, URL-safe slug.

    Accented characters are folded to ASCII, anything that is not a letter,
    digit, whitespace or hyphen is dropped, and runs of separators collapse
    into a single hyphen. Applying it to its own output returns the same slug.

    >>> slugify("Red Running Shoes")
    'red-running-shoes'
    >>> slugify("  Café  au   Lait! ")
    'cafe-au-lait'
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    ascii_text = _NON_SLUG_CHARS.sub("", ascii_text)
    return _SEPARATORS.sub("-", ascii_text).strip("-")
