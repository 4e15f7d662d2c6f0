"""Bundle descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class BundleDescriptor:
    """One registered bundle: where its artifact lives and what it is built from."""

    bundle_id: str
    output: str
    inputs: tuple[Path, ...]
    cached_path: Path
    filters: tuple[str, ...] = ()

    @property
    def extension(self) -> str:
        """Output type, e.g. ``css`` or ``js``."""
        return Path(self.output).suffix[1:].lower()
