"""JSON and text writers with atomic replacement."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist JSON by writing a temp file beside *path* and renaming it over."""
    content = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    write_text_atomic(path=path, content=content, temp_prefix=temp_prefix, temp_suffix=temp_suffix)


def write_text_atomic(
    *,
    path: Path,
    content: str,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Persist text atomically, creating parent directories as needed.

    The result carries the regular umask-derived mode, not the owner-only
    mode of the temp file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise

    assert temp_name is not None
    try:
        os.chmod(temp_name, _default_file_mode())
        os.replace(temp_name, path)
    except OSError:
        with suppress(FileNotFoundError):
            Path(temp_name).unlink()
        raise


def _default_file_mode() -> int:
    """Mode a plain ``open(path, "w")`` would create, honoring the process umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
