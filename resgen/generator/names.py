"""Identifier rules for generated container and property names."""

from __future__ import annotations

import re
from typing import Optional

from resgen.errors import InvalidNameError
from resgen.metadata.models import ResourceType

_NON_WORD = re.compile(r"\W")


def validate_container_name(name: str, resource_type: Optional[ResourceType] = None) -> str:
    """Return *name* unchanged if it may become a container name.

    The only rule is that the first character must be a letter.

    Raises:
        InvalidNameError: If *name* is empty or starts with anything else.
    """
    if not name or not name[0].isalpha():
        raise InvalidNameError(name, resource_type)
    return name


def generate_dir_key(name: str) -> str:
    """Container identifier for a directory segment (``my-dir`` -> ``my_dir``)."""
    return _NON_WORD.sub("_", name)


def generate_property_key(key: str) -> str:
    """Property identifier for a resource key (``a.txt`` -> ``a_txt``).

    Keys that would start with a digit are prefixed with an underscore.
    """
    identifier = _NON_WORD.sub("_", key)
    if identifier[:1].isdigit():
        identifier = f"_{identifier}"
    return identifier
