import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(value: str) -> str:
    """Turn a title like 'Plot #1, Sector B' into 'plot-1-sector-b'"""
    value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^a-z0-9]+", "-", value.lower())
    return value.strip("-")


def normalize_slug(value: str) -> str:
    """Lower-case and validate a client supplied slug"""
    slug = value.strip().lower()
    if not SLUG_PATTERN.match(slug):
        raise ValueError("Slug may only contain lower-case letters, digits and single hyphens")
    return slug
