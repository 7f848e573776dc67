"""Unit tests for resource and container metadata models (resgen.metadata.models).

Tests cover:
- ResourceType composition flags and container names
- ResourceMetadata path validation, file_name and key
- Category-specific fields (colors, images, fonts)
- Discriminated parsing of the metadata union
- ContainerMetadata traversal helpers and immutability
- ResourceManifest filtering
"""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from resgen.metadata.models import (
    AnyResourceMetadata,
    AssetMetadata,
    ColorMetadata,
    ContainerMetadata,
    FileMetadata,
    FontMetadata,
    ImageMetadata,
    ResourceManifest,
    ResourceMetadata,
    ResourceType,
    StringMetadata,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# ResourceType
# ---------------------------------------------------------------------------


class TestResourceType:
    def test_hierarchical_categories(self):
        assert ResourceType.ASSET.preserves_hierarchy is True
        assert ResourceType.FILE.preserves_hierarchy is True

    @pytest.mark.parametrize(
        "resource_type",
        [ResourceType.STRING, ResourceType.PLURAL, ResourceType.IMAGE, ResourceType.FONT, ResourceType.COLOR],
    )
    def test_flat_categories(self, resource_type):
        assert resource_type.preserves_hierarchy is False

    def test_container_name_is_plural(self):
        assert ResourceType.IMAGE.container_name == "images"
        assert ResourceType.ASSET.container_name == "assets"
        assert ResourceType.PLURAL.container_name == "plurals"

    def test_compares_equal_to_its_value(self):
        assert ResourceType("color") is ResourceType.COLOR
        assert ResourceType.COLOR == "color"


# ---------------------------------------------------------------------------
# ResourceMetadata
# ---------------------------------------------------------------------------


class TestResourceMetadata:
    def test_file_name_is_last_segment(self):
        assert AssetMetadata(path="sub/dir/b.txt").file_name == "b.txt"
        assert AssetMetadata(path="a.txt").file_name == "a.txt"

    def test_absolute_path_rejected(self):
        with pytest.raises(ValidationError):
            AssetMetadata(path="/etc/passwd")

    def test_backslash_path_rejected(self):
        with pytest.raises(ValidationError):
            FileMetadata(path="sub\\b.txt")

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            AssetMetadata(path="")

    def test_hierarchical_key_keeps_extension(self):
        assert AssetMetadata(path="sub/b.txt").key == "b.txt"

    def test_image_key_drops_extension(self):
        image = ImageMetadata(path="images/logo.png")
        assert image.key == "logo"
        assert image.extension == "png"

    def test_image_key_of_dotfile_is_unchanged(self):
        assert ImageMetadata(path="images/.hidden").key == ".hidden"

    def test_string_key_is_path(self):
        assert StringMetadata(path="app_name").key == "app_name"

    def test_frozen(self):
        asset = AssetMetadata(path="a.txt")
        with pytest.raises(ValidationError):
            asset.path = "b.txt"

    def test_resource_type_defaults_per_variant(self):
        assert AssetMetadata(path="a.txt").resource_type == ResourceType.ASSET
        assert FontMetadata(path="fonts/x.ttf").resource_type == ResourceType.FONT

    def test_base_model_is_abstract(self):
        with pytest.raises(ValidationError, match="abstract"):
            ResourceMetadata(path="a/b.txt", resource_type=ResourceType.ASSET)

    def test_base_model_rejected_in_container(self):
        with pytest.raises(ValidationError):
            ContainerMetadata(
                name="assets", parent_name="MR", resource_type=ResourceType.ASSET,
                resources=[{"path": "a/b.txt"}],
            )


class TestCategoryFields:
    def test_color_requires_hex(self):
        with pytest.raises(ValidationError):
            ColorMetadata(path="primary", light="red")

    def test_color_accepts_alpha(self):
        color = ColorMetadata(path="overlay", light="#00000080")
        assert color.dark is None

    def test_image_dimensions_non_negative(self):
        with pytest.raises(ValidationError):
            ImageMetadata(path="images/a.png", width=-1)

    def test_font_defaults(self):
        font = FontMetadata(path="fonts/Inter.ttf")
        assert font.style == "regular"
        assert font.family == ""


class TestDiscriminatedUnion:
    def test_parses_variant_from_type(self):
        adapter = TypeAdapter(AnyResourceMetadata)
        parsed = adapter.validate_python({"path": "primary", "resource_type": "color", "light": "#112233"})
        assert isinstance(parsed, ColorMetadata)
        assert parsed.light == "#112233"

    def test_unknown_type_rejected(self):
        adapter = TypeAdapter(AnyResourceMetadata)
        with pytest.raises(ValidationError):
            adapter.validate_python({"path": "x", "resource_type": "video"})

    def test_json_round_trip_keeps_variant(self):
        adapter = TypeAdapter(AnyResourceMetadata)
        image = ImageMetadata(path="images/logo.png", qualifiers=["@2x"], width=10)
        restored = adapter.validate_json(adapter.dump_json(image))
        assert restored == image
        assert isinstance(restored, ImageMetadata)


# ---------------------------------------------------------------------------
# ContainerMetadata
# ---------------------------------------------------------------------------


def _nested_container() -> ContainerMetadata:
    sub = ContainerMetadata(
        name="sub",
        parent_name="assets",
        resource_type=ResourceType.ASSET,
        directory="sub",
        resources=[AssetMetadata(path="sub/b.txt"), AssetMetadata(path="sub/c.txt")],
    )
    return ContainerMetadata(
        name="assets",
        parent_name="MR",
        resource_type=ResourceType.ASSET,
        resources=[AssetMetadata(path="a.txt")],
        containers=[sub],
    )


class TestContainerMetadata:
    def test_walk_is_depth_first(self):
        names = [c.name for c in _nested_container().walk()]
        assert names == ["assets", "sub"]

    def test_all_resources(self):
        paths = [r.path for r in _nested_container().all_resources()]
        assert paths == ["a.txt", "sub/b.txt", "sub/c.txt"]

    def test_depth(self):
        assert _nested_container().depth == 1
        flat = ContainerMetadata(name="images", parent_name="MR", resource_type=ResourceType.IMAGE)
        assert flat.depth == 0

    def test_resources_keep_their_variant(self):
        container = _nested_container()
        assert all(isinstance(r, AssetMetadata) for r in container.all_resources())

    def test_frozen(self):
        container = _nested_container()
        with pytest.raises(ValidationError):
            container.name = "other"


class TestResourceManifest:
    def test_of_type_keeps_order(self, mixed_resources):
        manifest = ResourceManifest(resources=mixed_resources)
        assets = manifest.of_type(ResourceType.ASSET)
        assert [a.path for a in assets] == ["sub/c.txt", "a.txt", "sub/b.txt"]

    def test_of_type_missing_category(self):
        manifest = ResourceManifest(resources=[AssetMetadata(path="a.txt")])
        assert manifest.of_type(ResourceType.COLOR) == []
