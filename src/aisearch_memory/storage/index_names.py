"""
Index name normalization for Azure AI Search.

Index names may only contain lower case letters, digits and dashes, cannot
start or end with a dash, and cannot exceed 128 characters. A few common
special characters are replaced with a dash; anything else is left for the
service to reject.

Replacing characters means different names can collide, e.g. "the-user"
and "the_user" map to the same index.
"""

import re

from ..core.errors import InvalidArgumentError

MAX_INDEX_NAME_LENGTH = 128

_REPLACE_CHARS = re.compile(r"[\s\\/._:]")


def normalize_index_name(index: str) -> str:
    """
    Map a caller-supplied index name to an engine-legal one.

    Args:
        index: Index name as passed by the caller

    Returns:
        Normalized index name; normalizing it again returns the same value

    Raises:
        InvalidArgumentError: If the name is empty or too long
    """
    if index is None or not index.strip():
        raise InvalidArgumentError("The index name is empty")

    name = _REPLACE_CHARS.sub("-", index.strip().lower())

    if name.startswith("-"):
        name = f"z{name}"

    if name.endswith("-"):
        name = f"{name}z"

    if len(name) > MAX_INDEX_NAME_LENGTH:
        raise InvalidArgumentError(
            f"The index name (prefix included) is too long, it cannot exceed {MAX_INDEX_NAME_LENGTH} chars")

    return name
