"""Source file emission for a completed generation pass.

Turns the frozen ``GeneratedContainer`` trees of one pass into a single
source file: the top-level object, one category container per result, the
nested directory containers, and the imports the categories collected.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

from resgen.generator.nodes import GenerationMode, GenerationResult
from .templates import TemplateRenderer

_SOURCE_TEMPLATE = "resources.kt.j2"


class SourceEmitter:
    """Renders generation results into source text and files."""

    def __init__(
        self,
        *,
        package_name: str,
        object_name: str,
        visibility: str = "public",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.package_name = package_name
        self.object_name = object_name
        self.visibility = visibility
        self.renderer = renderer or TemplateRenderer()

    def build_context(
        self,
        mode: GenerationMode,
        results: Sequence[GenerationResult],
        *,
        imports: Sequence[str] = (),
        root_members: Sequence[str] = (),
        target: Optional[str] = None,
    ) -> dict[str, Any]:
        """Template context for one pass.  Imports are de-duplicated and sorted."""
        return {
            "package_name": self.package_name,
            "object_name": self.object_name,
            "visibility": self.visibility,
            "mode": mode,
            "target": target,
            "imports": sorted(set(imports)),
            "root_members": list(root_members),
            "results": list(results),
        }

    def render(
        self,
        mode: GenerationMode,
        results: Sequence[GenerationResult],
        **kwargs: Any,
    ) -> str:
        """Render the source text of one pass."""
        return self.renderer.render(_SOURCE_TEMPLATE, self.build_context(mode, results, **kwargs))

    def write(
        self,
        output_path: str | Path,
        mode: GenerationMode,
        results: Sequence[GenerationResult],
        **kwargs: Any,
    ) -> Path:
        """Render the source of one pass and write it to *output_path*."""
        return self.renderer.render_to_file(
            _SOURCE_TEMPLATE, output_path, self.build_context(mode, results, **kwargs)
        )
