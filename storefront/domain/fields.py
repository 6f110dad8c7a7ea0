import re
from urllib.parse import urlparse

PLACEHOLDER_IMAGE_PREFIX = "https://placehold.co"


def slugify(name: str) -> str:
    """
    Derives the URL-safe slug of a category name.

    The name is lower-cased, every run of whitespace becomes a single hyphen,
    and anything that is not a word character or a hyphen is dropped.

    Args:
        name (str): The category display name.

    Returns:
        str: The slug, e.g. 'Summer Dresses!' -> 'summer-dresses'.
    """
    slug = re.sub(r"\s+", "-", name.lower())
    return re.sub(r"[^\w-]+", "", slug, flags=re.ASCII)


def split_tags(raw: str) -> list[str]:
    """Splits a comma-separated tag string, trimming and dropping empty entries."""
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def is_absolute_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_site_path(value: str) -> bool:
    """True for paths served by the site itself, e.g. '/hero.mp4'."""
    return value.startswith("/")
