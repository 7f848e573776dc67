"""Pydantic v2 models for discovered resources and recorded container shapes.

``ResourceMetadata`` describes one discovered resource file.  Concrete
variants are discriminated on ``resource_type`` so that a serialised
snapshot round-trips to the exact same typed records.

``ContainerMetadata`` is the snapshot a declaration pass records for each
generated container.  Implementation passes replay it to reproduce the same
tree shape on every target.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ResourceType(str, Enum):
    """Resource category.  Decides composition and property generation."""
    STRING = "string"
    PLURAL = "plural"
    IMAGE = "image"
    FONT = "font"
    COLOR = "color"
    ASSET = "asset"
    FILE = "file"

    @property
    def preserves_hierarchy(self) -> bool:
        """True for categories whose directory structure becomes nested containers."""
        return self in _HIERARCHICAL_TYPES

    @property
    def container_name(self) -> str:
        """Name of the generated category container, e.g. ``images``."""
        return f"{self.value}s"


_HIERARCHICAL_TYPES = frozenset({ResourceType.ASSET, ResourceType.FILE})


# ---------------------------------------------------------------------------
# Resource metadata
# ---------------------------------------------------------------------------

class ResourceMetadata(BaseModel):
    """One discovered resource file.  Immutable once discovered.

    Only the concrete per-category variants can be instantiated; snapshots
    can hold nothing else.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Root-relative path using '/' separators")
    resource_type: ResourceType

    @model_validator(mode="before")
    @classmethod
    def _concrete_variant_only(cls, data: Any) -> Any:
        if cls is ResourceMetadata or cls is _FileKeyedMetadata:
            raise ValueError(
                f"{cls.__name__} is abstract; use a per-category variant such as AssetMetadata"
            )
        return data

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        if value.startswith("/"):
            raise ValueError(f"resource path must be relative: {value!r}")
        if "\\" in value:
            raise ValueError(f"resource path must use '/' separators: {value!r}")
        return value

    @property
    def file_name(self) -> str:
        """Final path segment."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def key(self) -> str:
        """Lookup key of the resource.

        Flat-keyed file resources (images, fonts) drop their extension;
        value resources (strings, plurals, colors) and hierarchical
        resources use the final segment verbatim.
        """
        return self.file_name


class _FileKeyedMetadata(ResourceMetadata):
    @property
    def key(self) -> str:
        stem, dot, _ = self.file_name.rpartition(".")
        return stem if dot and stem else self.file_name

    @property
    def extension(self) -> str:
        _, dot, ext = self.file_name.rpartition(".")
        return ext if dot else ""


class StringMetadata(ResourceMetadata):
    """A localised string key."""
    resource_type: Literal["string"] = "string"
    translations: dict[str, str] = Field(
        default_factory=dict, description="Locale tag -> text ('base' for the default locale)"
    )


class PluralMetadata(ResourceMetadata):
    """A localised plural key."""
    resource_type: Literal["plural"] = "plural"
    quantities: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="Locale tag -> quantity ('one', 'other', ...) -> text"
    )


class ImageMetadata(_FileKeyedMetadata):
    """A bitmap or vector image."""
    resource_type: Literal["image"] = "image"
    qualifiers: list[str] = Field(
        default_factory=list, description="Source qualifiers such as '@2x' or 'dark'"
    )
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)


class FontMetadata(_FileKeyedMetadata):
    """A font file."""
    resource_type: Literal["font"] = "font"
    family: str = Field(default="", description="Font family name")
    style: str = Field(default="regular", description="Font style, e.g. 'bold'")


class ColorMetadata(ResourceMetadata):
    """A themed color value."""
    resource_type: Literal["color"] = "color"
    light: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?$")
    dark: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?$")


class AssetMetadata(ResourceMetadata):
    """A raw asset; its directory structure is preserved."""
    resource_type: Literal["asset"] = "asset"


class FileMetadata(ResourceMetadata):
    """An arbitrary bundled file; its directory structure is preserved."""
    resource_type: Literal["file"] = "file"


AnyResourceMetadata = Annotated[
    Union[
        StringMetadata,
        PluralMetadata,
        ImageMetadata,
        FontMetadata,
        ColorMetadata,
        AssetMetadata,
        FileMetadata,
    ],
    Field(discriminator="resource_type"),
]


# ---------------------------------------------------------------------------
# Container metadata
# ---------------------------------------------------------------------------

class ContainerMetadata(BaseModel):
    """Recorded shape of one generated container and everything nested in it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Generated container name")
    parent_name: str = Field(..., description="Name of the enclosing container")
    resource_type: ResourceType
    directory: Optional[str] = Field(
        default=None, description="Source directory segment; None for a category container"
    )
    resources: list[AnyResourceMetadata] = Field(
        default_factory=list, description="Direct leaf resources, in generation order"
    )
    containers: list[ContainerMetadata] = Field(
        default_factory=list, description="Nested containers, in generation order"
    )

    def walk(self) -> Iterator[ContainerMetadata]:
        """Yield this container and every nested container, depth-first."""
        yield self
        for child in self.containers:
            yield from child.walk()

    def all_resources(self) -> list[ResourceMetadata]:
        """Every leaf resource in the subtree, in traversal order."""
        return [resource for container in self.walk() for resource in container.resources]

    @property
    def depth(self) -> int:
        """Nesting depth below this container (0 for a flat container)."""
        if not self.containers:
            return 0
        return 1 + max(child.depth for child in self.containers)


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class ResourceManifest(BaseModel):
    """Discovery output handed to the generator for one invocation."""

    resources: list[AnyResourceMetadata] = Field(default_factory=list)

    def of_type(self, resource_type: ResourceType) -> list[ResourceMetadata]:
        """Resources of a single category, in manifest order."""
        return [r for r in self.resources if r.resource_type == resource_type]
