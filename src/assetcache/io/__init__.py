"""Shared file I/O helpers."""

from .files import file_mtime, read_source_text
from .json_io import load_json_file, write_json_atomic, write_text_atomic

__all__ = ["file_mtime", "load_json_file", "read_source_text", "write_json_atomic", "write_text_atomic"]
