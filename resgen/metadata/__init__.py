"""Typed resource metadata and recorded container snapshots.

Usage::

    from resgen.metadata import ImageMetadata, load_snapshot

    icon = ImageMetadata(path="images/icon.png")
    recorded = load_snapshot("build/resources-metadata.json")
"""

from resgen.metadata.models import (
    AnyResourceMetadata,
    AssetMetadata,
    ColorMetadata,
    ContainerMetadata,
    FileMetadata,
    FontMetadata,
    ImageMetadata,
    PluralMetadata,
    ResourceManifest,
    ResourceMetadata,
    ResourceType,
    StringMetadata,
)
from resgen.metadata.store import load_manifest, load_snapshot, save_snapshot

__all__ = [
    "AnyResourceMetadata",
    "AssetMetadata",
    "ColorMetadata",
    "ContainerMetadata",
    "FileMetadata",
    "FontMetadata",
    "ImageMetadata",
    "PluralMetadata",
    "ResourceManifest",
    "ResourceMetadata",
    "ResourceType",
    "StringMetadata",
    "load_manifest",
    "load_snapshot",
    "save_snapshot",
]
