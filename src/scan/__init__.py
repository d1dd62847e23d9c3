"""Input loading for modplan."""

from scan.manifest import ManifestError, load_descriptors, manifest_path

__all__ = ["ManifestError", "load_descriptors", "manifest_path"]
