"""JSON persistence for manifests and recorded container snapshots.

The declaration pass writes its ``ContainerMetadata`` list once; every
implementation pass reads it back.  Reading never mutates the file and
always yields fresh, frozen models.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import TypeAdapter

from resgen.metadata.models import ContainerMetadata, ResourceManifest

_SNAPSHOT_ADAPTER: TypeAdapter[list[ContainerMetadata]] = TypeAdapter(list[ContainerMetadata])


def save_snapshot(containers: list[ContainerMetadata], path: str | Path) -> Path:
    """Write a container snapshot as pretty-printed JSON.

    Args:
        containers: Category-level containers recorded by a declaration pass.
        path: Destination file.  Parent directories are created.

    Returns:
        The path that was written.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(_SNAPSHOT_ADAPTER.dump_json(containers, indent=2))
    return target


def load_snapshot(path: str | Path) -> list[ContainerMetadata]:
    """Load a snapshot previously written by :func:`save_snapshot`.

    Raises:
        FileNotFoundError: If the snapshot does not exist.
        pydantic.ValidationError: If the file is not a valid snapshot.
    """
    raw = Path(path).read_bytes()
    return _SNAPSHOT_ADAPTER.validate_json(raw)


def load_manifest(path: str | Path) -> ResourceManifest:
    """Load a resource manifest produced by file discovery."""
    raw = Path(path).read_text(encoding="utf-8")
    return ResourceManifest.model_validate_json(raw)
