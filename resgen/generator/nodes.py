"""Immutable output of a generation pass.

A pass produces ``GeneratedContainer`` trees.  They are frozen after
construction and handed to the source emitter together with the recorded
``ContainerMetadata``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from resgen.metadata.models import ContainerMetadata, ResourceType


class GenerationMode(str, Enum):
    """Which compilation pass produced a tree."""
    DECLARATION = "declaration"
    IMPLEMENTATION = "implementation"
    STANDALONE = "standalone"

    @property
    def object_modifier(self) -> str:
        """Modifier prefix for the top-level object."""
        return {
            GenerationMode.DECLARATION: "expect ",
            GenerationMode.IMPLEMENTATION: "actual ",
            GenerationMode.STANDALONE: "",
        }[self]

    @property
    def member_modifier(self) -> str:
        """Modifier prefix for nested objects and members; inside an expect object they are implicit."""
        return "actual " if self is GenerationMode.IMPLEMENTATION else ""


class GeneratedProperty(BaseModel):
    """One leaf: a resource property signature plus optional initializer."""

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str
    path: str = Field(..., description="Relative path of the resource behind this property")
    initializer: Optional[str] = Field(default=None, description="Platform expression; None when declaring")


class GeneratedContainer(BaseModel):
    """A generated grouping node: a category container or a nested directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    resource_type: ResourceType
    resource_class: str
    mode: GenerationMode
    directory: Optional[str] = None
    before: list[str] = Field(default_factory=list, description="Platform declarations placed before the properties")
    properties: list[GeneratedProperty] = Field(default_factory=list)
    containers: list[GeneratedContainer] = Field(default_factory=list)
    after: list[str] = Field(default_factory=list, description="Platform declarations placed after the properties")

    def walk(self) -> Iterator[GeneratedContainer]:
        yield self
        for child in self.containers:
            yield from child.walk()

    def value_paths(self) -> list[str]:
        """Qualified names of every property in the subtree, relative to this container."""
        paths = [prop.name for prop in self.properties]
        for child in self.containers:
            paths.extend(f"{child.name}.{path}" for path in child.value_paths())
        return paths

    def structure(self) -> tuple[Any, ...]:
        """Shape of the tree without initializers or hooks.

        Two passes over the same snapshot compare equal here regardless of
        their mode or target.
        """
        return (
            self.name,
            tuple(prop.name for prop in self.properties),
            tuple(child.structure() for child in self.containers),
        )


class GenerationResult(BaseModel):
    """A generated category container with the metadata that describes it."""

    model_config = ConfigDict(frozen=True)

    container: GeneratedContainer
    metadata: ContainerMetadata
    dropped: list[str] = Field(default_factory=list, description="Duplicate paths skipped while building")

    @property
    def resource_type(self) -> ResourceType:
        return self.metadata.resource_type
