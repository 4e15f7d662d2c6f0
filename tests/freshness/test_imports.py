"""Tests for stylesheet import scanning."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetcache.exceptions import ResourceNotFoundError
from assetcache.freshness.imports import import_candidates, parse_imports


def test_parses_quoted_and_bare_imports(make_file) -> None:
    child_a = make_file("css/a.less", "")
    child_b = make_file("css/b.less", "")
    parent = make_file("css/main.less", '@import "a.less";\n@import b;\n')

    assert parse_imports(parent) == (child_a.resolve(), child_b.resolve())


def test_appends_importing_file_extension(make_file) -> None:
    child = make_file("styles/colors.less", "")
    parent = make_file("styles/main.less", "@import 'colors';\n")

    assert parse_imports(parent) == (child.resolve(),)


def test_resolves_scss_partials(make_file) -> None:
    partial = make_file("scss/components/_buttons.scss", "")
    parent = make_file("scss/app.scss", '@import "components/buttons";\n')

    assert parse_imports(parent) == (partial.resolve(),)


def test_partial_fallback_only_for_scss(make_file) -> None:
    make_file("less/_mixins.less", "")
    parent = make_file("less/app.less", '@import "mixins";\n')

    assert parse_imports(parent) == ()


def test_literal_path_wins_over_extension_fallback(make_file) -> None:
    literal = make_file("css/theme", "")
    make_file("css/theme.scss", "")
    make_file("css/_theme.scss", "")
    parent = make_file("css/app.scss", '@import "theme";\n')

    assert parse_imports(parent) == (literal.resolve(),)


@pytest.mark.parametrize(
    "directive",
    [
        '@import url("http://fonts.example.com/font.css");',
        "@import url(theme.less);",
    ],
    ids=["remote-url", "local-url"],
)
def test_skips_url_imports(make_file, directive: str) -> None:
    make_file("css/theme.less", "")
    parent = make_file("css/main.less", f"{directive}\n")

    assert parse_imports(parent) == ()


@pytest.mark.parametrize("modifier", ["(reference)", "(inline)"])
def test_accepts_less_import_modifiers(make_file, modifier: str) -> None:
    child = make_file("css/mixins.less", "")
    parent = make_file("css/main.less", f'@import {modifier} "mixins";\n')

    assert parse_imports(parent) == (child.resolve(),)


def test_skips_commented_lines(make_file) -> None:
    make_file("css/old.scss", "")
    parent = make_file("css/main.scss", '// @import "old";\n')

    assert parse_imports(parent) == ()


def test_deduplicates_different_spellings(make_file) -> None:
    child = make_file("css/shared/vars.scss", "")
    parent = make_file(
        "css/main.scss",
        '@import "shared/vars";\n@import "shared/vars.scss";\n@import "../css/shared/vars";\n',
    )

    assert parse_imports(parent) == (child.resolve(),)


def test_unresolvable_imports_are_dropped(make_file) -> None:
    child = make_file("css/real.scss", "")
    parent = make_file("css/main.scss", '@import "missing";\n@import "real";\n')

    assert parse_imports(parent) == (child.resolve(),)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError, match="missing.scss"):
        parse_imports(tmp_path / "missing.scss")


def test_import_candidates_order(tmp_path: Path) -> None:
    candidates = import_candidates(tmp_path, "parts/grid", "scss")

    assert candidates == [
        tmp_path / "parts/grid",
        tmp_path / "parts/grid.scss",
        tmp_path / "parts/_grid.scss",
    ]
