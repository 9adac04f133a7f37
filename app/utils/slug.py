# app/utils/slug.py
import re
import unicodedata


def slugify(name: str, fallback: str = "course") -> str:
    """
    Generate a URL-friendly slug from a title.

    Args:
        name: The title to slugify.
        fallback: Used when nothing printable is left.

    Returns:
        A lower-case, hyphen-separated slug.
    """
    # Transliterate unicode to ASCII (e.g., "Café" -> "Cafe")
    normalized = unicodedata.normalize("NFKD", name)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")

    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")
    return slug or fallback
