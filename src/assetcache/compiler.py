"""Artifact production for bundles and one-off assets.

Preprocessor dialects (SCSS, LESS) are not compiled here: inputs are read
as text, filtered and concatenated. Hosts that need real stylesheet
compilation pass their own callable to ``AssetCache``.
"""

from __future__ import annotations

from typing import TypeAlias

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from assetcache.bundles.models import BundleDescriptor
from assetcache.constants.assets import (
    COMPILABLE_OUTPUT_EXTENSIONS,
    FONT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    MINIFIED_INFIX,
    PREPROCESSED_STYLESHEET_EXTENSIONS,
    STYLESHEET_EXTENSION,
)
from assetcache.constants.cache import ARTIFACT_TEMP_PREFIX, ARTIFACT_TEMP_SUFFIX
from assetcache.exceptions import CompileError, ResourceNotFoundError
from assetcache.filters import FilterSet, apply_filters
from assetcache.io import read_source_text, write_text_atomic

logger = logging.getLogger(__name__)

Compiler: TypeAlias = Callable[[BundleDescriptor], object]


class BundleCompiler:
    """Concatenates a bundle's inputs through its filters into the cached artifact."""

    def __init__(self, filters: FilterSet) -> None:
        self.filters = filters

    def __call__(self, bundle: BundleDescriptor) -> Path:
        return self.compile(bundle)

    def compile(self, bundle: BundleDescriptor) -> Path:
        """Write the artifact for *bundle* and return its path."""
        if bundle.extension not in COMPILABLE_OUTPUT_EXTENSIONS:
            raise CompileError(f"Unknown asset type '{bundle.extension}' for output {bundle.output}")

        parts: list[str] = []
        for source in bundle.inputs:
            text = read_source_text(source)
            parts.append(apply_filters(text, self.filters.for_file(source.name, bundle.filters), source=source))

        content = apply_filters("\n".join(parts), self.filters.for_file(Path(bundle.output).name))
        try:
            write_text_atomic(
                path=bundle.cached_path,
                content=content,
                temp_prefix=ARTIFACT_TEMP_PREFIX,
                temp_suffix=ARTIFACT_TEMP_SUFFIX,
            )
        except OSError as exc:
            raise CompileError(f"Could not write artifact {bundle.cached_path} ({exc})") from exc

        logger.info("Compiled %s from %d input(s)", bundle.output, len(bundle.inputs))
        return bundle.cached_path


def one_off_output_name(input_path: Path, *, minify: bool) -> str:
    """Name the output of a single-file compile.

    Stylesheet dialects become ``.css`` (``.min.css`` when minifying), images
    and fonts keep their name, everything else gains ``.min`` when minifying.
    """
    ext = input_path.suffix[1:]
    stem = input_path.stem
    if ext.lower() in PREPROCESSED_STYLESHEET_EXTENSIONS:
        new_ext = f"{MINIFIED_INFIX}.{STYLESHEET_EXTENSION}" if minify else STYLESHEET_EXTENSION
        return f"{stem}.{new_ext}"
    if _is_binary_asset(ext):
        return input_path.name
    return f"{stem}.{MINIFIED_INFIX}.{ext}" if minify else input_path.name


def compile_one_off(
    input_path: Path,
    output_dir: Path,
    *,
    minify: bool = True,
    filters: FilterSet | None = None,
) -> Path:
    """Compile one file into *output_dir*, creating it if needed."""
    if not input_path.is_file():
        raise ResourceNotFoundError(input_path)
    source = input_path.resolve()
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CompileError(f'Could not create output path "{output_dir}". Please check its permissions.') from exc

    output_path = output_dir / one_off_output_name(source, minify=minify)
    if _is_binary_asset(source.suffix[1:]):
        shutil.copyfile(source, output_path)
        return output_path

    filter_set = filters if filters is not None else FilterSet({})
    content = apply_filters(read_source_text(source), filter_set.for_file(source.name), source=source)
    content = apply_filters(content, filter_set.for_file(output_path.name))
    write_text_atomic(
        path=output_path,
        content=content,
        temp_prefix=ARTIFACT_TEMP_PREFIX,
        temp_suffix=ARTIFACT_TEMP_SUFFIX,
    )
    return output_path


def _is_binary_asset(ext: str) -> bool:
    ext = ext.lower()
    return ext in IMAGE_EXTENSIONS or ext in FONT_EXTENSIONS
