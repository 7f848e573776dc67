"""Exception hierarchy for the resource generator.

Every failure raised while building a category derives from
``GenerationError`` so the orchestrator can isolate one category's failure
from the others.  An empty category is not an error: the generation entry
points simply return ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from resgen.metadata.models import ResourceType


class GenerationError(Exception):
    """Raised when a category cannot be generated."""

    def __init__(self, message: str, resource_type: Optional["ResourceType"] = None) -> None:
        self.resource_type = resource_type
        prefix = f"[{resource_type.value}] " if resource_type is not None else ""
        super().__init__(f"{prefix}{message}")


class InvalidNameError(GenerationError):
    """A directory segment cannot become a container name."""

    def __init__(self, name: str, resource_type: Optional["ResourceType"] = None) -> None:
        self.name = name
        super().__init__(f"Catalog name should start from letter: {name!r}", resource_type)


class MissingMetadataError(GenerationError):
    """An implementation pass was requested without a declaration snapshot."""

    def __init__(self, resource_type: "ResourceType") -> None:
        super().__init__(
            "No container metadata was recorded for this category; "
            "the declaration pass must run before any implementation pass",
            resource_type,
        )


class AmbiguousMetadataError(GenerationError):
    """The supplied snapshot holds more than one container for a category."""

    def __init__(self, resource_type: "ResourceType", count: int) -> None:
        self.count = count
        super().__init__(
            f"Expected exactly one recorded container, found {count}",
            resource_type,
        )


class DuplicateResourceError(GenerationError):
    """Two resources share the exact same relative path (strict mode only)."""

    def __init__(self, path: str, resource_type: Optional["ResourceType"] = None) -> None:
        self.path = path
        super().__init__(f"Duplicate resource path: {path}", resource_type)


class PathConflictError(GenerationError):
    """Two siblings at one tree level share a name or a generated identifier."""

    def __init__(
        self,
        path: str,
        resource_type: Optional["ResourceType"] = None,
        identifier: Optional[str] = None,
    ) -> None:
        self.path = path
        self.identifier = identifier
        if identifier is None:
            message = f"Path {path!r} collides with an existing file or directory of the same name"
        else:
            message = f"Path {path!r} maps to identifier {identifier!r}, already used by a sibling"
        super().__init__(message, resource_type)
