"""
Path slugging.

Turns a list of path segments such as ``["List View", "Édit!"]`` into a
URL-safe path like ``/list-view/edit``.
"""

import re
from typing import Iterable, Optional

from unidecode import UnidecodeError, unidecode

_UNSAFE_CHARS = re.compile(r"[^0-9a-z-]+")


def _transliterate(text: str) -> Optional[str]:
    """Transliterate *text* to lowercase ASCII, or None if any character has no ASCII form."""
    try:
        return unidecode(text, errors="strict").lower()
    except UnidecodeError:
        return None


def convert_to_slug(text: str) -> Optional[str]:
    """Return the slug for a single segment, or None when nothing survives."""
    latin = _transliterate(text)
    if latin is None:
        return None
    result = "-".join(part for part in _UNSAFE_CHARS.split(latin) if part)
    return result or None


def path_to_string(path: Iterable[str]) -> str:
    """
    Convert path segments to a slash-delimited slug path.

    Segments that slug to nothing are dropped, so ``[]`` and ``["***"]``
    both give ``"/"``.

    Args:
        path: Path segments, e.g. ``["list", "detailview"]``

    Returns:
        Slug path, e.g. ``"/list/detailview"``
    """
    slugs = (convert_to_slug(segment) for segment in path)
    return "/" + "/".join(slug for slug in slugs if slug)
