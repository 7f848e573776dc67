"""Per-category orchestration of the three generation passes.

Every pass goes through the same two steps: obtain a ``ContainerMetadata``
shape, then render that shape into a ``GeneratedContainer``.  The shape is
computed from raw resources by the declaration and standalone passes, and
replayed from a recorded snapshot by the implementation pass.  Because
rendering is a function of the shape alone, a declaration tree and every
implementation tree replayed from its snapshot are structurally identical.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from resgen.errors import AmbiguousMetadataError, MissingMetadataError
from resgen.generator.nodes import (
    GeneratedContainer,
    GeneratedProperty,
    GenerationMode,
    GenerationResult,
)
from resgen.generator.platforms import PlatformResourceGenerator
from resgen.generator.properties import PropertyGenerator, property_generator_for
from resgen.generator.tree import (
    DuplicatePolicy,
    build_file_tree,
    build_flat_shape,
    record_shape,
)
from resgen.metadata.models import AnyResourceMetadata, ContainerMetadata, ResourceMetadata, ResourceType


class ResourceTypeGenerator:
    """Generates the container of one resource category.

    Attributes:
        resource_type: Category served by this generator.
        property_generator: Declaration-side signature capability.
        platform: Target capability; required for implementation and
            standalone passes, unused when declaring.
        duplicates: Policy for exact duplicate paths in hierarchical categories.
        package_name: Package of the generated sources, exposed to platform
            templates.
    """

    def __init__(
        self,
        resource_type: ResourceType,
        *,
        property_generator: Optional[PropertyGenerator] = None,
        platform: Optional[PlatformResourceGenerator] = None,
        duplicates: DuplicatePolicy = DuplicatePolicy.DROP,
        package_name: str = "",
    ) -> None:
        self.resource_type = ResourceType(resource_type)
        self.property_generator = property_generator or property_generator_for(self.resource_type)
        self.platform = platform
        self.duplicates = duplicates
        self.package_name = package_name

    # -- Entry points --------------------------------------------------------

    def generate_declaration(
        self,
        parent_name: str,
        metadata: Iterable[AnyResourceMetadata],
    ) -> Optional[GenerationResult]:
        """Declaration-only container plus the freshly recorded shape.

        Returns ``None`` when no resources of this category exist.
        """
        resources = self._of_type(metadata)
        if not resources:
            return None
        shape, dropped = self._build_shape(parent_name, resources)
        container = self._render(shape, GenerationMode.DECLARATION, root=parent_name)
        return GenerationResult(container=container, metadata=shape, dropped=dropped)

    def generate_implementation(
        self,
        parent_name: str,
        recorded: Sequence[ContainerMetadata],
    ) -> Optional[GenerationResult]:
        """Replay the recorded shape of this category with platform initializers.

        Returns ``None`` when *recorded* is empty: the category never existed
        on either side.

        Raises:
            MissingMetadataError: *recorded* holds other categories but none
                for this one.
            AmbiguousMetadataError: *recorded* holds several containers for
                this category.
        """
        if not recorded:
            return None
        matches = [c for c in recorded if c.resource_type == self.resource_type]
        if not matches:
            raise MissingMetadataError(self.resource_type)
        if len(matches) > 1:
            raise AmbiguousMetadataError(self.resource_type, len(matches))

        self._require_platform(GenerationMode.IMPLEMENTATION)
        # Fresh copy; the recorded snapshot is never modified.
        shape = matches[0].model_copy(update={"parent_name": parent_name}, deep=True)
        container = self._render(shape, GenerationMode.IMPLEMENTATION, root=parent_name)
        return GenerationResult(container=container, metadata=shape)

    def generate_standalone(
        self,
        parent_name: str,
        metadata: Iterable[AnyResourceMetadata],
    ) -> Optional[GenerationResult]:
        """Platform container built straight from raw metadata, with no replay."""
        resources = self._of_type(metadata)
        if not resources:
            return None
        self._require_platform(GenerationMode.STANDALONE)
        shape, dropped = self._build_shape(parent_name, resources)
        container = self._render(shape, GenerationMode.STANDALONE, root=parent_name)
        return GenerationResult(container=container, metadata=shape, dropped=dropped)

    def imports(self, mode: GenerationMode) -> list[str]:
        """Imports the container of this category needs in *mode*."""
        if mode is GenerationMode.DECLARATION or self.platform is None:
            return self.property_generator.imports()
        return self.platform.imports(self.resource_type, package=self.package_name)

    # -- Shape ---------------------------------------------------------------

    def _of_type(self, metadata: Iterable[AnyResourceMetadata]) -> list[ResourceMetadata]:
        return [m for m in metadata if m.resource_type == self.resource_type]

    def _build_shape(
        self,
        parent_name: str,
        resources: list[ResourceMetadata],
    ) -> tuple[ContainerMetadata, list[str]]:
        name = self.resource_type.container_name
        if self.resource_type.preserves_hierarchy:
            tree = build_file_tree(resources, duplicates=self.duplicates,
                                   resource_type=self.resource_type)
            shape = record_shape(tree, name=name, parent_name=parent_name,
                                 resource_type=self.resource_type)
            return shape, tree.dropped
        shape = build_flat_shape(resources, name=name, parent_name=parent_name,
                                 resource_type=self.resource_type)
        return shape, []

    # -- Rendering -----------------------------------------------------------

    def _render(
        self,
        shape: ContainerMetadata,
        mode: GenerationMode,
        *,
        root: str,
        is_category: bool = True,
    ) -> GeneratedContainer:
        properties = [self._create_property(r, mode, root=root) for r in shape.resources]
        containers = [
            self._render(child, mode, root=root, is_category=False)
            for child in shape.containers
        ]

        before: list[str] = []
        after: list[str] = []
        if is_category and mode is not GenerationMode.DECLARATION:
            resources = shape.all_resources()
            hook_context = {
                "root": root,
                "package": self.package_name,
                "modifier": mode.member_modifier,
            }
            before = self.platform.generate_before_properties(
                self.resource_type, resources, **hook_context
            )
            after = self.platform.generate_after_properties(
                self.resource_type, resources, **hook_context
            )

        return GeneratedContainer(
            name=shape.name,
            resource_type=self.resource_type,
            resource_class=self.property_generator.resource_class,
            mode=mode,
            directory=shape.directory,
            before=before,
            properties=properties,
            containers=containers,
            after=after,
        )

    def _create_property(
        self,
        resource: ResourceMetadata,
        mode: GenerationMode,
        *,
        root: str,
    ) -> GeneratedProperty:
        if mode is GenerationMode.DECLARATION:
            return self.property_generator.generate_property(resource)
        initializer = self.platform.generate_initializer(
            resource, root=root, package=self.package_name
        )
        return self.property_generator.generate_property(resource, initializer)

    def _require_platform(self, mode: GenerationMode) -> None:
        if self.platform is None:
            raise ValueError(
                f"{mode.value} pass for {self.resource_type.value} resources needs a platform"
            )
