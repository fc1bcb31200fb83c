"""camelCase alias generation for the Pydantic models.

Serialised metadata and breakdowns use the same field names the
host application sends (``usesHttps``, ``totalTrackersDetected``).
"""

from __future__ import annotations


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"uses_https"``.

    Returns:
        The camelCase equivalent, e.g. ``"usesHttps"``.
    """
    head, *rest = name.split("_")
    return head + "".join(w.capitalize() for w in rest)
