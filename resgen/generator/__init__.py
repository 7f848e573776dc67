"""Container tree generation for typed resource accessors.

Quick usage::

    from resgen.generator import ResourceTypeGenerator, get_platform
    from resgen.metadata import ResourceType

    declaring = ResourceTypeGenerator(ResourceType.ASSET)
    declared = declaring.generate_declaration("MR", resources)

    implementing = ResourceTypeGenerator(ResourceType.ASSET, platform=get_platform("jvm"))
    actual = implementing.generate_implementation("MR", [declared.metadata])
"""

from resgen.generator.names import generate_dir_key, generate_property_key, validate_container_name
from resgen.generator.nodes import (
    GeneratedContainer,
    GeneratedProperty,
    GenerationMode,
    GenerationResult,
)
from resgen.generator.platforms import PLATFORMS, PlatformResourceGenerator, get_platform
from resgen.generator.properties import PROPERTY_GENERATORS, PropertyGenerator, property_generator_for
from resgen.generator.tree import (
    DuplicatePolicy,
    FileNode,
    FileTree,
    build_file_tree,
    build_flat_shape,
    record_shape,
)
from resgen.generator.type_generator import ResourceTypeGenerator

__all__ = [
    "PLATFORMS",
    "PROPERTY_GENERATORS",
    "DuplicatePolicy",
    "FileNode",
    "FileTree",
    "GeneratedContainer",
    "GeneratedProperty",
    "GenerationMode",
    "GenerationResult",
    "PlatformResourceGenerator",
    "PropertyGenerator",
    "ResourceTypeGenerator",
    "build_file_tree",
    "build_flat_shape",
    "generate_dir_key",
    "generate_property_key",
    "get_platform",
    "property_generator_for",
    "record_shape",
    "validate_container_name",
]
