"""Unit tests for hierarchy composition (resgen.generator.tree).

Tests cover:
- build_file_tree: sorting, directory reuse, name validation
- Duplicate handling under DROP and ERROR policies
- File/directory collisions
- record_shape: nested container names, directories and parent links
- build_flat_shape: caller order
"""

from __future__ import annotations

import pytest

from resgen.errors import DuplicateResourceError, InvalidNameError, PathConflictError
from resgen.generator.tree import (
    ROOT_NAME,
    DuplicatePolicy,
    build_file_tree,
    build_flat_shape,
    record_shape,
)
from resgen.metadata.models import AssetMetadata, ImageMetadata, ResourceType

pytestmark = pytest.mark.unit


def _assets(*paths: str) -> list[AssetMetadata]:
    return [AssetMetadata(path=p) for p in paths]


# ---------------------------------------------------------------------------
# build_file_tree
# ---------------------------------------------------------------------------


class TestBuildFileTree:
    def test_root_is_synthetic_container(self, asset_resources):
        tree = build_file_tree(asset_resources)
        assert tree.root.name == ROOT_NAME
        assert tree.root.is_container

    def test_children_follow_sorted_paths(self, asset_resources):
        tree = build_file_tree(asset_resources)
        assert [c.name for c in tree.root.children] == ["a.txt", "sub"]
        sub = tree.root.find_child("sub")
        assert [c.name for c in sub.children] == ["b.txt", "c.txt"]

    def test_directory_is_reused(self):
        tree = build_file_tree(_assets("x/1.txt", "x/2.txt", "x/3.txt"))
        assert len(tree.root.children) == 1
        assert len(tree.root.children[0].children) == 3

    def test_leaves_in_traversal_order(self, asset_resources):
        tree = build_file_tree(asset_resources)
        assert [leaf.path for leaf in tree.leaves()] == ["a.txt", "sub/b.txt", "sub/c.txt"]

    def test_leaf_and_container_flags(self, asset_resources):
        tree = build_file_tree(asset_resources)
        leaf = tree.root.find_child("a.txt")
        sub = tree.root.find_child("sub")
        assert leaf.is_leaf and not leaf.is_container
        assert sub.is_container and not sub.is_leaf

    def test_invalid_directory_name(self):
        with pytest.raises(InvalidNameError) as exc_info:
            build_file_tree(_assets("1logo/a.png"), resource_type=ResourceType.ASSET)
        assert exc_info.value.name == "1logo"
        assert exc_info.value.resource_type is ResourceType.ASSET

    def test_valid_directory_with_digit_later(self):
        tree = build_file_tree(_assets("logo1/a.png"))
        assert tree.root.children[0].name == "logo1"

    def test_file_names_are_not_validated(self):
        tree = build_file_tree(_assets("1.txt"))
        assert tree.root.children[0].is_leaf

    def test_empty_segment_fails(self):
        with pytest.raises(InvalidNameError):
            build_file_tree(_assets("a//b.txt"))

    def test_invalid_name_aborts_whole_build(self):
        with pytest.raises(InvalidNameError):
            build_file_tree(_assets("a.txt", "good/b.txt", "9bad/c.txt"))


class TestDuplicates:
    def test_duplicate_dropped_by_default(self):
        tree = build_file_tree(_assets("sub/b.txt", "sub/b.txt"))
        assert [leaf.path for leaf in tree.leaves()] == ["sub/b.txt"]
        assert tree.dropped == ["sub/b.txt"]

    def test_duplicate_at_root_dropped(self):
        tree = build_file_tree([ImageMetadata(path="icon.png"), ImageMetadata(path="icon.png")])
        assert len(tree.root.children) == 1
        assert tree.dropped == ["icon.png"]

    def test_first_duplicate_wins(self):
        first = AssetMetadata(path="a.txt")
        tree = build_file_tree([first, AssetMetadata(path="a.txt")])
        assert tree.root.children[0].metadata is first

    def test_duplicate_error_policy(self):
        with pytest.raises(DuplicateResourceError) as exc_info:
            build_file_tree(_assets("a.txt", "a.txt"), duplicates=DuplicatePolicy.ERROR)
        assert exc_info.value.path == "a.txt"


class TestPathConflicts:
    def test_file_then_directory(self):
        with pytest.raises(PathConflictError):
            build_file_tree(_assets("sub", "sub/b.txt"))

    def test_nested_file_then_directory(self):
        with pytest.raises(PathConflictError) as exc_info:
            build_file_tree(_assets("d/e/f.txt", "d/e"), resource_type=ResourceType.FILE)
        assert exc_info.value.path == "d/e/f.txt"
        assert exc_info.value.resource_type is ResourceType.FILE


# ---------------------------------------------------------------------------
# record_shape
# ---------------------------------------------------------------------------


class TestRecordShape:
    def test_category_container(self, asset_resources):
        shape = record_shape(
            build_file_tree(asset_resources),
            name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
        )
        assert shape.name == "assets"
        assert shape.parent_name == "MR"
        assert shape.directory is None
        assert [r.path for r in shape.resources] == ["a.txt"]

    def test_nested_containers(self, asset_resources):
        shape = record_shape(
            build_file_tree(asset_resources),
            name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
        )
        (sub,) = shape.containers
        assert sub.name == "sub"
        assert sub.parent_name == "assets"
        assert sub.directory == "sub"
        assert sub.resource_type is ResourceType.ASSET
        assert [r.path for r in sub.resources] == ["sub/b.txt", "sub/c.txt"]

    def test_directory_keys_are_identifiers(self):
        shape = record_shape(
            build_file_tree(_assets("my-dir/x.txt")),
            name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
        )
        assert shape.containers[0].name == "my_dir"
        assert shape.containers[0].directory == "my-dir"

    def test_every_leaf_recorded_once(self):
        resources = _assets("a.txt", "b/c.txt", "b/d/e.txt", "b/d/f.txt", "g.txt")
        shape = record_shape(
            build_file_tree(resources),
            name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
        )
        paths = [r.path for r in shape.all_resources()]
        assert sorted(paths) == sorted(r.path for r in resources)
        assert len(paths) == len(set(paths))
        assert shape.depth == 2


class TestBuildFlatShape:
    def test_keeps_caller_order(self):
        images = [ImageMetadata(path="images/z.png"), ImageMetadata(path="images/a.png")]
        shape = build_flat_shape(images, name="images", parent_name="MR", resource_type=ResourceType.IMAGE)
        assert [r.path for r in shape.resources] == ["images/z.png", "images/a.png"]
        assert shape.containers == []


class TestIdentifierCollisions:
    def test_directories_mapping_to_same_key(self):
        with pytest.raises(PathConflictError) as exc_info:
            record_shape(
                build_file_tree(_assets("my-dir/x.txt", "my_dir/y.txt")),
                name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
            )
        assert exc_info.value.identifier == "my_dir"
        assert exc_info.value.path == "my_dir"
        assert exc_info.value.resource_type is ResourceType.ASSET

    def test_files_mapping_to_same_key(self):
        with pytest.raises(PathConflictError) as exc_info:
            record_shape(
                build_file_tree(_assets("a.txt", "a_txt")),
                name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
            )
        assert exc_info.value.identifier == "a_txt"

    def test_nested_collision_reports_full_path(self):
        with pytest.raises(PathConflictError) as exc_info:
            record_shape(
                build_file_tree(_assets("docs/my-dir/x.txt", "docs/my_dir/y.txt")),
                name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
            )
        assert exc_info.value.path == "docs/my_dir"

    def test_distinct_keys_in_different_directories_are_fine(self):
        shape = record_shape(
            build_file_tree(_assets("a/x.txt", "b/x.txt")),
            name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
        )
        assert [c.name for c in shape.containers] == ["a", "b"]


class TestCategoryDirectoryPrefix:
    """Paths that already start with the category directory nest under it."""

    def test_single_category_directory(self):
        tree = build_file_tree(_assets("assets/a.txt", "assets/sub/b.txt", "assets/sub/c.txt"))
        (assets,) = tree.root.children
        assert assets.name == "assets"
        assert assets.is_container
        assert [c.name for c in assets.children] == ["a.txt", "sub"]
        assert [c.name for c in assets.find_child("sub").children] == ["b.txt", "c.txt"]

    def test_recorded_shape(self):
        shape = record_shape(
            build_file_tree(_assets("assets/a.txt", "assets/sub/b.txt", "assets/sub/c.txt")),
            name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
        )
        assert shape.resources == []
        (inner,) = shape.containers
        assert inner.name == "assets"
        assert inner.parent_name == "assets"
        assert [r.path for r in inner.resources] == ["assets/a.txt"]
        (sub,) = inner.containers
        assert sub.parent_name == "assets"
        assert [r.path for r in sub.resources] == ["assets/sub/b.txt", "assets/sub/c.txt"]
