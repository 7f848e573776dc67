"""Composition of resources into container shapes.

Hierarchy-preserving categories (assets, files) go through a two-phase
build: ``build_file_tree`` grows a mutable ``FileNode`` tree mirroring the
directory structure, then ``record_shape`` walks it once and freezes it into
``ContainerMetadata``.  Every directory is fully populated before it is
closed into its parent.

Flat-keyed categories skip the tree entirely: ``build_flat_shape`` puts every
resource straight into the category container, in caller order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

from resgen.errors import DuplicateResourceError, PathConflictError
from resgen.generator.names import generate_dir_key, generate_property_key, validate_container_name
from resgen.metadata.models import ContainerMetadata, ResourceMetadata, ResourceType

ROOT_NAME = "root"


class DuplicatePolicy(str, Enum):
    """What to do with a second resource at an already-seen exact path."""
    DROP = "drop"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Mutable build-phase tree
# ---------------------------------------------------------------------------

@dataclass
class FileNode:
    """A directory (container) or a file (leaf), never both."""

    name: str
    metadata: Optional[ResourceMetadata] = None
    path: Optional[str] = None
    is_container: bool = False
    children: list[FileNode] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.metadata is not None

    def find_child(self, name: str) -> Optional[FileNode]:
        """First child with this segment name, file or directory alike."""
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass
class FileTree:
    """Result of ``build_file_tree``: the synthetic root plus skipped duplicates."""

    root: FileNode
    dropped: list[str] = field(default_factory=list)

    def leaves(self) -> Iterator[FileNode]:
        """Every leaf, depth-first in child order."""
        stack = list(reversed(self.root.children))
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))


def build_file_tree(
    resources: Iterable[ResourceMetadata],
    *,
    duplicates: DuplicatePolicy = DuplicatePolicy.DROP,
    resource_type: Optional[ResourceType] = None,
) -> FileTree:
    """Grow a directory tree from resources, sorted by path.

    Directory lookup is by segment name only.  A new directory segment is
    validated before its container is created, so one illegal segment aborts
    the whole build.

    Args:
        resources: Resources of one hierarchy-preserving category.
        duplicates: ``DROP`` skips a second resource at an exact path already
            seen (recording it in ``FileTree.dropped``); ``ERROR`` raises.
        resource_type: Category, used only to annotate raised errors.

    Raises:
        InvalidNameError: A directory segment does not start with a letter.
        DuplicateResourceError: Exact duplicate path under ``ERROR``.
        PathConflictError: A file and a directory share a name at one level.
    """
    entries = sorted(((r.path, r) for r in resources), key=lambda entry: entry[0])
    tree = FileTree(root=FileNode(name=ROOT_NAME, is_container=True))

    for path, metadata in entries:
        segments = path.split("/")
        last_index = len(segments) - 1
        node = tree.root

        for index, segment in enumerate(segments):
            is_last = index == last_index
            child = node.find_child(segment)

            if child is None:
                if is_last:
                    child = FileNode(name=segment, metadata=metadata, path=path)
                else:
                    validate_container_name(segment, resource_type)
                    child = FileNode(name=segment, is_container=True)
                node.children.append(child)
            elif is_last:
                if child.is_leaf and child.path == path:
                    if duplicates is DuplicatePolicy.ERROR:
                        raise DuplicateResourceError(path, resource_type)
                    tree.dropped.append(path)
                else:
                    raise PathConflictError(path, resource_type)
            elif child.is_leaf:
                raise PathConflictError(path, resource_type)

            node = child

    return tree


# ---------------------------------------------------------------------------
# Freezing into container metadata
# ---------------------------------------------------------------------------

def record_shape(
    tree: FileTree,
    *,
    name: str,
    parent_name: str,
    resource_type: ResourceType,
) -> ContainerMetadata:
    """Freeze a file tree into the category container's metadata.

    The synthetic root becomes the category container itself; each directory
    becomes a nested container named by ``generate_dir_key``.

    Raises:
        PathConflictError: Two siblings map to the same generated identifier,
            e.g. ``my-dir`` and ``my_dir`` or ``a.txt`` and ``a_txt``.
    """
    return _record(tree.root, name=name, parent_name=parent_name,
                   resource_type=resource_type, directory=None, prefix="")


def _record(
    node: FileNode,
    *,
    name: str,
    parent_name: str,
    resource_type: ResourceType,
    directory: Optional[str],
    prefix: str,
) -> ContainerMetadata:
    _check_sibling_identifiers(node, prefix=prefix, resource_type=resource_type)
    resources = [child.metadata for child in node.children if child.is_leaf]
    # Children are closed before the parent is constructed.
    containers = [
        _record(
            child,
            name=generate_dir_key(child.name),
            parent_name=name,
            resource_type=resource_type,
            directory=child.name,
            prefix=f"{prefix}{child.name}/",
        )
        for child in node.children
        if child.is_container
    ]
    return ContainerMetadata(
        name=name,
        parent_name=parent_name,
        resource_type=resource_type,
        directory=directory,
        resources=resources,
        containers=containers,
    )


def _check_sibling_identifiers(
    node: FileNode,
    *,
    prefix: str,
    resource_type: ResourceType,
) -> None:
    """Properties and nested containers share one scope in the generated object."""
    seen: dict[str, str] = {}
    for child in node.children:
        if child.is_leaf:
            identifier = generate_property_key(child.metadata.key)
            path = child.path
        else:
            identifier = generate_dir_key(child.name)
            path = f"{prefix}{child.name}"
        if identifier in seen:
            raise PathConflictError(path, resource_type, identifier=identifier)
        seen[identifier] = path


def build_flat_shape(
    resources: Iterable[ResourceMetadata],
    *,
    name: str,
    parent_name: str,
    resource_type: ResourceType,
) -> ContainerMetadata:
    """Single-level container holding every resource in caller order."""
    return ContainerMetadata(
        name=name,
        parent_name=parent_name,
        resource_type=resource_type,
        resources=list(resources),
    )
