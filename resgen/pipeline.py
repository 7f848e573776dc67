"""resgen pass orchestrator.

Runs one generation pass over every resource category:

DECLARATION    -- shared shape from the resource manifest; records a snapshot.
IMPLEMENTATION -- per-target tree replayed from the recorded snapshot.
STANDALONE     -- per-target tree straight from the manifest (single-target builds).

Categories are independent: a failure in one is recorded on the
``PassResult`` and the others still generate.

Usage::

    python -m resgen.pipeline declare resources.json -o build/generated/resgen
    python -m resgen.pipeline implement --target jvm -o build/generated/resgen
    RESGEN_TARGETS=jvm,js python -m resgen.pipeline implement
    python -m resgen.pipeline standalone resources.json --target android
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from rich.markup import escape

from resgen.config import GeneratorConfig
from resgen.emitter import SourceEmitter
from resgen.errors import GenerationError
from resgen.generator.nodes import GenerationMode, GenerationResult
from resgen.generator.platforms import PLATFORMS, PlatformResourceGenerator, get_platform
from resgen.generator.type_generator import ResourceTypeGenerator
from resgen.metadata.models import AnyResourceMetadata, ContainerMetadata, ResourceType
from resgen.metadata.store import load_manifest, load_snapshot, save_snapshot
from resgen.utils import (
    console,
    print_error,
    print_pass_header,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Pass result
# ---------------------------------------------------------------------------


class PassResult(BaseModel):
    """Everything one pass produced, category by category."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    mode: GenerationMode
    parent_name: str
    target: Optional[str] = None
    results: list[GenerationResult] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    root_members: list[str] = Field(default_factory=list)
    failures: dict[ResourceType, GenerationError] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        """True when no category failed."""
        return not self.failures

    @property
    def metadata(self) -> list[ContainerMetadata]:
        """Category-level snapshots, in generation order."""
        return [result.metadata for result in self.results]

    def result_for(self, resource_type: ResourceType) -> Optional[GenerationResult]:
        for result in self.results:
            if result.resource_type == resource_type:
                return result
        return None

    def raise_for_failures(self) -> None:
        """Re-raise the first recorded category failure, if any."""
        for error in self.failures.values():
            raise error


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ResourcesGenerator:
    """Runs a generation pass across every resource category.

    Attributes:
        config: Generator configuration.
        platform: Target capability; ``None`` for a declaration-only generator.
        generators: One ``ResourceTypeGenerator`` per category, in category order.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        platform: Optional[PlatformResourceGenerator] = None,
        resource_types: Optional[Sequence[ResourceType]] = None,
    ) -> None:
        self.config = config
        self.platform = platform
        self.generators: dict[ResourceType, ResourceTypeGenerator] = {
            resource_type: ResourceTypeGenerator(
                resource_type,
                platform=platform,
                duplicates=config.duplicate_policy,
                package_name=config.package_name,
            )
            for resource_type in (resource_types or list(ResourceType))
        }

    @property
    def parent_name(self) -> str:
        return self.config.object_name

    def declare(self, resources: Iterable[AnyResourceMetadata]) -> PassResult:
        """Declaration pass over every category."""
        resources = list(resources)
        return self._run(
            GenerationMode.DECLARATION,
            self.generators,
            lambda gen: gen.generate_declaration(self.parent_name, resources),
        )

    def implement(
        self,
        recorded: Sequence[ContainerMetadata],
        resource_types: Optional[Sequence[ResourceType]] = None,
    ) -> PassResult:
        """Implementation pass replaying *recorded*.

        By default only the categories present in *recorded* are replayed.
        Passing *resource_types* requests specific categories; one missing
        from a non-empty snapshot fails with ``MissingMetadataError``.
        """
        if resource_types is None:
            present = {container.resource_type for container in recorded}
            resource_types = [t for t in self.generators if t in present]
        return self._run(
            GenerationMode.IMPLEMENTATION,
            resource_types,
            lambda gen: gen.generate_implementation(self.parent_name, recorded),
        )

    def standalone(self, resources: Iterable[AnyResourceMetadata]) -> PassResult:
        """Single-target pass built straight from the manifest."""
        resources = list(resources)
        return self._run(
            GenerationMode.STANDALONE,
            self.generators,
            lambda gen: gen.generate_standalone(self.parent_name, resources),
        )

    def _run(
        self,
        mode: GenerationMode,
        resource_types: Iterable[ResourceType],
        produce: Callable[[ResourceTypeGenerator], Optional[GenerationResult]],
    ) -> PassResult:
        outcome = PassResult(
            mode=mode,
            parent_name=self.parent_name,
            target=self.platform.target if mode is not GenerationMode.DECLARATION and self.platform else None,
        )
        for resource_type in resource_types:
            generator = self.generators[resource_type]
            try:
                result = produce(generator)
            except GenerationError as exc:
                outcome.failures[resource_type] = exc
                continue
            if result is None:
                continue
            outcome.results.append(result)
            outcome.imports.extend(generator.imports(mode))

        if mode is not GenerationMode.DECLARATION and self.platform and outcome.results:
            outcome.root_members.extend(
                self.platform.generate_root_members(root=self.parent_name, package=self.config.package_name)
            )
        return outcome


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


def report_pass(outcome: PassResult) -> None:
    """Print a per-category summary, dropped duplicates and failures."""
    rows = []
    for result in outcome.results:
        containers = list(result.container.walk())
        rows.append((
            result.resource_type.value,
            result.container.name,
            str(len(containers)),
            str(sum(len(c.properties) for c in containers)),
            str(len(result.dropped)),
        ))
    if rows:
        print_summary_table(
            rows,
            ["Category", "Container", "Containers", "Properties", "Dropped"],
            title=f"{outcome.mode.value.capitalize()} pass",
        )
    else:
        console.print("  [dim]No resources to generate.[/dim]")

    for result in outcome.results:
        for path in result.dropped:
            print_warning(f"  Duplicate resource path dropped: {escape(path)}")
    for resource_type, error in outcome.failures.items():
        print_error(f"  {resource_type.value}: {escape(str(error))}")


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def run_declare(config: GeneratorConfig, manifest_path: Path) -> PassResult:
    """Declaration pass: writes the common source and the metadata snapshot."""
    print_pass_header(GenerationMode.DECLARATION.value)
    manifest = load_manifest(manifest_path)
    outcome = ResourcesGenerator(config).declare(manifest.resources)
    report_pass(outcome)
    if not outcome.success:
        return outcome

    emitter = _emitter(config)
    source = emitter.write(config.common_source_path, outcome.mode, outcome.results, imports=outcome.imports)
    snapshot = save_snapshot(outcome.metadata, config.metadata_path)
    console.print(f"  [green]+[/green] {source}")
    console.print(f"  [green]+[/green] {snapshot}")
    return outcome


def run_implement(config: GeneratorConfig, target: str, metadata_path: Optional[Path] = None) -> PassResult:
    """Implementation pass for one target, replaying the recorded snapshot."""
    print_pass_header(GenerationMode.IMPLEMENTATION.value, target)
    recorded = load_snapshot(metadata_path or config.metadata_path)
    outcome = ResourcesGenerator(config, platform=get_platform(target)).implement(recorded)
    report_pass(outcome)
    if not outcome.success:
        return outcome

    source = _emitter(config).write(
        config.target_source_path(target),
        outcome.mode,
        outcome.results,
        imports=outcome.imports,
        root_members=outcome.root_members,
        target=target,
    )
    console.print(f"  [green]+[/green] {source}")
    return outcome


def run_standalone(config: GeneratorConfig, manifest_path: Path, target: str) -> PassResult:
    """Standalone pass for a single-target build."""
    print_pass_header(GenerationMode.STANDALONE.value, target)
    manifest = load_manifest(manifest_path)
    outcome = ResourcesGenerator(config, platform=get_platform(target)).standalone(manifest.resources)
    report_pass(outcome)
    if not outcome.success:
        return outcome

    source = _emitter(config).write(
        config.target_source_path(target),
        outcome.mode,
        outcome.results,
        imports=outcome.imports,
        root_members=outcome.root_members,
        target=target,
    )
    console.print(f"  [green]+[/green] {source}")
    return outcome


def _emitter(config: GeneratorConfig) -> SourceEmitter:
    return SourceEmitter(
        package_name=config.package_name,
        object_name=config.object_name,
        visibility=config.visibility,
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``python -m resgen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="resgen",
        description="resgen -- typed multi-target resource accessor generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  resgen declare resources.json -o build/generated/resgen\n"
            "  resgen implement --target jvm -o build/generated/resgen\n"
            "  RESGEN_TARGETS=jvm,js resgen implement -o build/generated/resgen\n"
            "  resgen standalone resources.json --target android --package com.example\n"
        ),
    )
    parser.add_argument("--config", "-c", default=None, help="JSON configuration file (default: from environment)")
    parser.add_argument("--output", "-o", default=None, help="Output directory")
    parser.add_argument("--package", default=None, help="Package of the generated sources")
    parser.add_argument("--object-name", default=None, help="Name of the top-level generated object")
    parser.add_argument("--strict", action="store_true", help="Fail on duplicate resource paths")

    sub = parser.add_subparsers(dest="command", required=True)

    declare = sub.add_parser("declare", help="Run the declaration pass")
    declare.add_argument("manifest", help="Path to the resource manifest JSON")

    implement = sub.add_parser("implement", help="Run implementation passes for one or every configured target")
    implement.add_argument("--target", "-t", default=None, choices=sorted(PLATFORMS),
                           help="Target to implement (default: every configured target)")
    implement.add_argument("--metadata", default=None, help="Snapshot path (default: from configuration)")

    standalone = sub.add_parser("standalone", help="Run a single-target pass without a declaration")
    standalone.add_argument("manifest", help="Path to the resource manifest JSON")
    standalone.add_argument("--target", "-t", required=True, choices=sorted(PLATFORMS))

    args = parser.parse_args(argv)

    config = GeneratorConfig.load(Path(args.config)) if args.config else GeneratorConfig.from_env()
    overrides: dict[str, object] = {}
    if args.output:
        overrides["output_dir"] = Path(args.output)
    if args.package:
        overrides["package_name"] = args.package
    if args.object_name:
        overrides["object_name"] = args.object_name
    if args.strict:
        overrides["strict_duplicates"] = True
    if overrides:
        config = GeneratorConfig.model_validate({**config.model_dump(), **overrides})

    if args.command in ("declare", "standalone") and not Path(args.manifest).exists():
        console.print(f"[bold red]Error:[/bold red] Manifest not found: {escape(args.manifest)}")
        sys.exit(1)

    if args.command == "declare":
        outcomes = [run_declare(config, Path(args.manifest))]
    elif args.command == "implement":
        targets = [args.target] if args.target else list(config.targets)
        if not targets:
            console.print(
                "[bold red]Error:[/bold red] No target given; pass --target "
                "or configure targets (RESGEN_TARGETS)."
            )
            sys.exit(1)
        unknown = [t for t in targets if t not in PLATFORMS]
        if unknown:
            console.print(f"[bold red]Error:[/bold red] Unknown targets: {escape(', '.join(unknown))}")
            sys.exit(1)
        metadata_path = Path(args.metadata) if args.metadata else None
        if not (metadata_path or config.metadata_path).exists():
            console.print(
                "[bold red]Error:[/bold red] No metadata snapshot found; "
                "run the declaration pass first."
            )
            sys.exit(1)
        outcomes = [run_implement(config, target, metadata_path) for target in targets]
    else:
        outcomes = [run_standalone(config, Path(args.manifest), args.target)]

    if all(outcome.success for outcome in outcomes):
        print_success("Generation completed successfully!")
    else:
        print_error("Generation failed.")
        sys.exit(1)


if __name__ == "__main__":
    main()
