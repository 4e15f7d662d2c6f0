"""Bundle identity, descriptors and registration."""

from .identity import artifact_path, bundle_hash, minified_name, production_path
from .models import BundleDescriptor
from .registry import BundleRegistry, resolve_inputs

__all__ = [
    "BundleDescriptor",
    "BundleRegistry",
    "artifact_path",
    "bundle_hash",
    "minified_name",
    "production_path",
    "resolve_inputs",
]
