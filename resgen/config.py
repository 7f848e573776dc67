"""resgen configuration.

Centralised, typed configuration for one generator invocation.  Settings use
Pydantic v2 models so they are validated at construction time and can be
serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from resgen.generator.tree import DuplicatePolicy

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Instances are created once by the CLI entry point (or by a build plugin)
    and passed to ``ResourcesGenerator`` and the source emitter.
    """

    package_name: str = Field(default="generated.resources", description="Package of the generated sources")
    object_name: str = Field(default="MR", description="Name of the top-level generated object")
    visibility: Literal["public", "internal"] = Field(default="public")
    output_dir: Path = Field(default=Path("./build/generated/resgen"))
    common_dir: str = Field(default="commonMain", description="Output subdirectory of the declaration pass")
    metadata_file: str = Field(default="resources-metadata.json")
    strict_duplicates: bool = Field(
        default=False, description="Fail on exact duplicate resource paths instead of dropping them"
    )
    targets: list[str] = Field(default_factory=list, description="Targets that run an implementation pass")

    @field_validator("object_name")
    @classmethod
    def _object_name_is_identifier(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"object_name must be an identifier: {value!r}")
        return value

    @field_validator("package_name")
    @classmethod
    def _package_is_dotted_identifier(cls, value: str) -> str:
        if not all(_IDENTIFIER.match(part) for part in value.split(".")):
            raise ValueError(f"package_name must be dot-separated identifiers: {value!r}")
        return value

    # ------------------------------------------------------------------
    # Derived values (read-only properties)
    # ------------------------------------------------------------------

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return DuplicatePolicy.ERROR if self.strict_duplicates else DuplicatePolicy.DROP

    @property
    def metadata_path(self) -> Path:
        """Snapshot written by the declaration pass and read by implementation passes."""
        return self.output_dir / self.metadata_file

    @property
    def common_source_path(self) -> Path:
        """Source file produced by the declaration pass."""
        return self.output_dir / self.common_dir / f"{self.object_name}.kt"

    def target_source_path(self, target: str) -> Path:
        """Source file produced by the implementation or standalone pass of *target*."""
        return self.output_dir / f"{target}Main" / f"{self.object_name}.kt"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/resgen.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.output_dir / "resgen.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            RESGEN_PACKAGE, RESGEN_OBJECT_NAME, RESGEN_VISIBILITY,
            RESGEN_OUTPUT_DIR, RESGEN_STRICT_DUPLICATES, RESGEN_TARGETS.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("RESGEN_PACKAGE"):
            kwargs["package_name"] = os.environ["RESGEN_PACKAGE"]
        if os.environ.get("RESGEN_OBJECT_NAME"):
            kwargs["object_name"] = os.environ["RESGEN_OBJECT_NAME"]
        if os.environ.get("RESGEN_VISIBILITY"):
            kwargs["visibility"] = os.environ["RESGEN_VISIBILITY"]
        if os.environ.get("RESGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["RESGEN_OUTPUT_DIR"])
        if os.environ.get("RESGEN_STRICT_DUPLICATES"):
            kwargs["strict_duplicates"] = os.environ["RESGEN_STRICT_DUPLICATES"].lower() in ("1", "true", "yes")

        targets_str = os.environ.get("RESGEN_TARGETS", "")
        kwargs["targets"] = [t.strip() for t in targets_str.split(",") if t.strip()]

        return cls(**kwargs)
