"""Filesystem resource exceptions."""

from __future__ import annotations

from pathlib import Path

from assetcache.exceptions.base import AssetCacheError


class ResourceNotFoundError(AssetCacheError, FileNotFoundError):
    """Raised when a required input, artifact or alias target cannot be located."""

    def __init__(self, path: Path | str, message: str | None = None) -> None:
        self.path = str(path)
        super().__init__(message or f"Resource could not be located: {self.path}")

    def __str__(self) -> str:
        return str(self.args[0])


class ReadFailureError(AssetCacheError, OSError):
    """Raised when a file exists but cannot be read or stat'ed."""

    def __init__(self, path: Path | str, reason: object = None) -> None:
        self.path = str(path)
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Failed to read file: {self.path}{detail}")

    def __str__(self) -> str:
        return str(self.args[0])


class PersistenceError(AssetCacheError, OSError):
    """Raised when the sidecar cache file cannot be read or written."""

    def __init__(self, path: Path | str, reason: object = None) -> None:
        self.path = str(path)
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Failed to persist cache sidecar: {self.path}{detail}")

    def __str__(self) -> str:
        return str(self.args[0])
