"""Shared pytest fixtures for the resgen test suite.

Provides reusable fixtures for:
- Resource metadata of every category
- A mixed resource manifest on disk
- A generator configuration rooted in a temporary directory
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from resgen.config import GeneratorConfig
from resgen.metadata import (
    AssetMetadata,
    ColorMetadata,
    FileMetadata,
    FontMetadata,
    ImageMetadata,
    PluralMetadata,
    StringMetadata,
)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

@pytest.fixture
def asset_resources() -> list[AssetMetadata]:
    """Two-level asset hierarchy: ``a.txt`` at the root, two files under ``sub``."""
    return [
        AssetMetadata(path="sub/c.txt"),
        AssetMetadata(path="a.txt"),
        AssetMetadata(path="sub/b.txt"),
    ]


@pytest.fixture
def file_resources() -> list[FileMetadata]:
    return [
        FileMetadata(path="data/config.json"),
        FileMetadata(path="data/nested/deep/table.csv"),
        FileMetadata(path="readme.md"),
    ]


@pytest.fixture
def string_resources() -> list[StringMetadata]:
    return [
        StringMetadata(path="app_name", translations={"base": "Demo", "de": "Demo"}),
        StringMetadata(path="greeting", translations={"base": "Hello!"}),
    ]


@pytest.fixture
def image_resources() -> list[ImageMetadata]:
    return [
        ImageMetadata(path="images/logo.png", width=64, height=64),
        ImageMetadata(path="images/icon.svg"),
    ]


@pytest.fixture
def mixed_resources(
    asset_resources,
    file_resources,
    string_resources,
    image_resources,
) -> list:
    """One or more resources of every category."""
    return [
        *string_resources,
        PluralMetadata(path="items", quantities={"base": {"one": "%d item", "other": "%d items"}}),
        *image_resources,
        FontMetadata(path="fonts/Inter-Bold.ttf", family="Inter", style="bold"),
        ColorMetadata(path="primary", light="#FF0000", dark="#00FF0080"),
        *asset_resources,
        *file_resources,
    ]


# ---------------------------------------------------------------------------
# Files & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def manifest_file(tmp_path: Path, mixed_resources) -> Path:
    """The mixed resources written as a discovery manifest."""
    path = tmp_path / "resources.json"
    payload = {"resources": [r.model_dump(mode="json") for r in mixed_resources]}
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def generator_config(tmp_path: Path) -> GeneratorConfig:
    """Configuration writing everything below ``tmp_path/out``."""
    return GeneratorConfig(
        package_name="com.example.app",
        object_name="MR",
        output_dir=tmp_path / "out",
    )
