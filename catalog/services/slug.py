"""Slug generation for product titles."""

import re
import time

_DISALLOWED_CHARACTERS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATOR_RUNS = re.compile(r"[\s_-]+", re.ASCII)


def generate_slug(title: str) -> str:
    """
    Normalize a title into a URL-safe, lower-case slug.

    Every slug in the system goes through this function: product creation,
    title updates, seeding and the form draft preview.

    Args:
        title: Product title.

    Returns:
        Slug made of [a-z0-9-], or ``product-<epoch-ms>`` when nothing
        usable is left after normalization.
    """
    slug = title.lower().strip()
    slug = _DISALLOWED_CHARACTERS.sub("", slug)
    slug = _SEPARATOR_RUNS.sub("-", slug)
    slug = slug.strip("-")

    if not slug:
        slug = f"product-{int(time.time() * 1000)}"

    return slug
