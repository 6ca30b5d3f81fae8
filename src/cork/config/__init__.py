"""Configuration parsing modules for cork."""

from .manifest import MANIFEST_FILENAME, Dependency, Manifest, load_manifest, parse_manifest

__all__ = ["MANIFEST_FILENAME", "Dependency", "Manifest", "load_manifest", "parse_manifest"]
