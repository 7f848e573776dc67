"""Declaration-side capability: one property signature per resource.

Each category is described by a ``PropertyGenerator`` value rather than a
subclass.  The generic tree and replay machinery only ever calls
``generate_property``; everything category-specific lives in this table and
in the platform providers of :mod:`resgen.generator.platforms`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from resgen.generator.names import generate_property_key
from resgen.generator.nodes import GeneratedProperty
from resgen.metadata.models import ResourceMetadata, ResourceType

RUNTIME_PACKAGE = "dev.resgen.runtime"
RESOURCE_CONTAINER_CLASS = "ResourceContainer"


@dataclass(frozen=True)
class PropertyGenerator:
    """Signature generator for one category."""

    resource_type: ResourceType
    resource_class: str

    def property_name(self, metadata: ResourceMetadata) -> str:
        return generate_property_key(metadata.key)

    def generate_property(
        self,
        metadata: ResourceMetadata,
        initializer: Optional[str] = None,
    ) -> GeneratedProperty:
        """Signature for *metadata*, optionally carrying a platform initializer."""
        return GeneratedProperty(
            name=self.property_name(metadata),
            type_name=self.resource_class,
            path=metadata.path,
            initializer=initializer,
        )

    def imports(self) -> list[str]:
        """Common-code imports every container of this category needs."""
        return [
            f"{RUNTIME_PACKAGE}.{RESOURCE_CONTAINER_CLASS}",
            f"{RUNTIME_PACKAGE}.{self.resource_class}",
        ]


PROPERTY_GENERATORS: dict[ResourceType, PropertyGenerator] = {
    ResourceType.STRING: PropertyGenerator(ResourceType.STRING, "StringResource"),
    ResourceType.PLURAL: PropertyGenerator(ResourceType.PLURAL, "PluralsResource"),
    ResourceType.IMAGE: PropertyGenerator(ResourceType.IMAGE, "ImageResource"),
    ResourceType.FONT: PropertyGenerator(ResourceType.FONT, "FontResource"),
    ResourceType.COLOR: PropertyGenerator(ResourceType.COLOR, "ColorResource"),
    ResourceType.ASSET: PropertyGenerator(ResourceType.ASSET, "AssetResource"),
    ResourceType.FILE: PropertyGenerator(ResourceType.FILE, "FileResource"),
}


def property_generator_for(resource_type: ResourceType) -> PropertyGenerator:
    """Look up the registered signature generator for a category."""
    return PROPERTY_GENERATORS[ResourceType(resource_type)]
