import re
import time
from typing import Callable, Optional


def slugify(name: str) -> str:
    """
    Build the URL-safe part of a slug.

    Args:
        name: Display name (e.g., "Mirror A")

    Returns:
        Lowercase text with non-alphanumeric runs collapsed to one hyphen and
        no leading or trailing hyphens (e.g., "mirror-a")
    """
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


def timestamp_token() -> int:
    """Current time in milliseconds"""
    return int(time.time() * 1000)


def generate_unique_slug(
    name: str,
    is_taken: Callable[[str], bool],
    token: Optional[int] = None,
) -> str:
    """
    Generate a slug of the form "<slugified-name>-<timestamp>".

    The timestamp token is bumped until ``is_taken`` reports the slug free,
    so two products created (or renamed) within the same millisecond still
    get distinct slugs.
    """
    base = slugify(name)
    token = timestamp_token() if token is None else token

    while True:
        candidate = f"{base}-{token}" if base else str(token)
        if not is_taken(candidate):
            return candidate
        token += 1
