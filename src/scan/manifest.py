"""Descriptor manifest loading.

A manifest lists module descriptors in modplan's own neutral schema, either
as TOML (``[[module]]`` tables) or JSON (``{"module": [...]}``).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from artifacts.models.artifacts.descriptors import ModuleDescriptor

if TYPE_CHECKING:
    from rules.config import ModPlanConfig

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = frozenset({".toml", ".json"})


class ManifestError(Exception):
    """Raised when a descriptor manifest is missing or cannot be parsed."""


class DescriptorManifest(BaseModel):
    """Top-level manifest document."""

    model_config = ConfigDict(extra="forbid")

    module: list[ModuleDescriptor] = Field(
        default_factory=list,
        description="Module descriptors, in declaration order",
    )


def _read_manifest_data(path: Path) -> object:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = (
            f"Unsupported manifest format '{suffix}' for {path}; "
            f"expected one of {', '.join(sorted(SUPPORTED_SUFFIXES))}"
        )
        raise ManifestError(msg)

    try:
        if suffix == ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        return orjson.loads(path.read_bytes())
    except OSError as exc:
        msg = f"Failed to read manifest {path}: {exc}"
        raise ManifestError(msg) from exc
    except (tomllib.TOMLDecodeError, orjson.JSONDecodeError) as exc:
        msg = f"Invalid {suffix[1:].upper()} in {path}: {exc}"
        raise ManifestError(msg) from exc


def load_descriptors(path: Path) -> list[ModuleDescriptor]:
    """Load module descriptors from a manifest file.

    Args:
        path: Manifest file (``.toml`` or ``.json``).

    Returns:
        Descriptors in the order the manifest declares them.

    Raises:
        ManifestError: If the file is missing, malformed or fails validation.
    """
    if not path.is_file():
        msg = f"Manifest not found: {path}"
        raise ManifestError(msg)

    data = _read_manifest_data(path)

    try:
        manifest = DescriptorManifest.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid manifest {path}: {exc}"
        raise ManifestError(msg) from exc

    logger.debug("Loaded %d descriptors from %s", len(manifest.module), path)
    return manifest.module


def manifest_path(
    root: Path, config: ModPlanConfig, override: str | None = None
) -> Path:
    """Return the manifest path for a project, honouring a CLI override."""
    if override is not None:
        return Path(override).expanduser().resolve()
    return (root / config.manifest).resolve()


__all__ = [
    "DescriptorManifest",
    "ManifestError",
    "load_descriptors",
    "manifest_path",
]
