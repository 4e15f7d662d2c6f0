"""Tests for artifact freshness over inputs and transitive imports."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetcache.bundles import BundleDescriptor
from assetcache.exceptions import ResourceNotFoundError
from assetcache.freshness.checker import is_fresh, subtree_is_stale
from assetcache.freshness.graph import DependencyGraph
from assetcache.freshness.imports import parse_imports
from assetcache.freshness.ledger import ModTimeLedger

BASE_MTIME = 1_700_000_000
ARTIFACT_MTIME = BASE_MTIME + 100


class RecordingParser:
    """Wraps the real import parser and records every scanned file."""

    def __init__(self) -> None:
        self.calls: list[Path] = []

    def __call__(self, path: Path) -> tuple[Path, ...]:
        self.calls.append(path)
        return parse_imports(path)


@pytest.fixture()
def parser() -> RecordingParser:
    return RecordingParser()


@pytest.fixture()
def graph(parser: RecordingParser) -> DependencyGraph:
    return DependencyGraph(parser=parser)


@pytest.fixture()
def ledger() -> ModTimeLedger:
    return ModTimeLedger()


def _bundle(artifact: Path, *inputs: Path) -> BundleDescriptor:
    return BundleDescriptor(
        bundle_id="test",
        output=artifact.name,
        inputs=tuple(path.resolve() for path in inputs),
        cached_path=artifact,
    )


def test_missing_artifact_is_not_fresh(make_file, tmp_path: Path, ledger, graph) -> None:
    source = make_file("a.css", "a{}")

    assert not is_fresh(_bundle(tmp_path / "missing.css", source), ledger=ledger, graph=graph)


def test_fresh_when_artifact_newer_than_inputs(make_file, ledger, graph) -> None:
    first = make_file("a.css", "a{}")
    second = make_file("b.js", "b()")
    artifact = make_file("out/app.css", mtime=ARTIFACT_MTIME)
    bundle = _bundle(artifact, first, second)

    assert is_fresh(bundle, ledger=ledger, graph=graph)
    assert is_fresh(bundle, ledger=ledger, graph=graph)


def test_touched_input_short_circuits_before_import_scan(make_file, touch, ledger, graph, parser) -> None:
    base = make_file("scss/base.scss", '@import "vars";\n')
    make_file("scss/_vars.scss", "$a: 1;")
    script = make_file("app.js", "go()")
    artifact = make_file("out/app.css", mtime=ARTIFACT_MTIME)
    bundle = _bundle(artifact, base, script)

    assert is_fresh(bundle, ledger=ledger, graph=graph)
    parser.calls.clear()

    touch(script, ARTIFACT_MTIME + 1)

    assert not is_fresh(bundle, ledger=ledger, graph=graph)
    assert parser.calls == []


def test_touching_only_an_imported_partial_makes_bundle_stale(make_file, touch, ledger, graph) -> None:
    base = make_file("scss/base.scss", '@import "vars";\nbody { color: $a; }\n')
    partial = make_file("scss/_vars.scss", "$a: red;")
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)
    bundle = _bundle(artifact, base)
    assert is_fresh(bundle, ledger=ledger, graph=graph)

    touch(partial, ARTIFACT_MTIME + 10)
    assert not is_fresh(bundle, ledger=ledger, graph=graph)

    touch(artifact, ARTIFACT_MTIME + 20)
    assert is_fresh(bundle, ledger=ledger, graph=graph)


def test_deep_chain_is_checked(make_file, touch, ledger, graph) -> None:
    top = make_file("less/top.less", "@import 'middle';")
    make_file("less/middle.less", "@import 'bottom';")
    bottom = make_file("less/bottom.less", "")
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)

    touch(bottom, ARTIFACT_MTIME + 1)

    assert not is_fresh(_bundle(artifact, top), ledger=ledger, graph=graph)


def test_import_cycle_terminates_and_is_fresh(make_file, ledger, graph) -> None:
    first = make_file("scss/a.scss", '@import "b";')
    make_file("scss/b.scss", '@import "a";')
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)

    assert is_fresh(_bundle(artifact, first), ledger=ledger, graph=graph)


def test_import_cycle_reports_changed_member(make_file, touch, ledger, graph) -> None:
    first = make_file("scss/a.scss", '@import "b";')
    second = make_file("scss/b.scss", '@import "a";')
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)

    touch(second, ARTIFACT_MTIME + 5)

    assert not is_fresh(_bundle(artifact, first), ledger=ledger, graph=graph)


def test_self_import_terminates(make_file, ledger, graph) -> None:
    looped = make_file("scss/self.scss", '@import "self";')
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)

    assert is_fresh(_bundle(artifact, looped), ledger=ledger, graph=graph)


def test_diamond_imports_are_scanned_once(make_file, ledger, graph, parser) -> None:
    top = make_file("scss/top.scss", '@import "left";\n@import "right";')
    make_file("scss/_left.scss", '@import "shared";')
    make_file("scss/_right.scss", '@import "shared";')
    shared = make_file("scss/_shared.scss", "")
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)

    assert is_fresh(_bundle(artifact, top), ledger=ledger, graph=graph)
    assert parser.calls.count(shared.resolve()) == 1
    assert len(parser.calls) == 4


def test_vanished_import_target_is_a_leaf(make_file, tmp_path: Path, ledger) -> None:
    top = make_file("scss/top.scss", "")
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)
    ledger.observe(top.resolve())
    graph = DependencyGraph({str(top.resolve()): [str(tmp_path / "scss" / "_deleted.scss")]})

    assert is_fresh(_bundle(artifact, top), ledger=ledger, graph=graph)


def test_missing_direct_input_raises(make_file, tmp_path: Path, ledger, graph) -> None:
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)

    with pytest.raises(ResourceNotFoundError):
        is_fresh(_bundle(artifact, tmp_path / "nope.scss"), ledger=ledger, graph=graph)


def test_changed_file_rescans_its_imports(make_file) -> None:
    top = make_file("scss/top.scss", '@import "added";', mtime=BASE_MTIME)
    make_file("scss/_added.scss", "", mtime=ARTIFACT_MTIME + 5)
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)
    key = str(top.resolve())
    ledger = ModTimeLedger({key: BASE_MTIME - 60})
    graph = DependencyGraph({key: []})

    assert not is_fresh(_bundle(artifact, top), ledger=ledger, graph=graph)
    assert ledger.recorded_mtime(top.resolve()) == BASE_MTIME


def test_unchanged_file_trusts_cached_imports(make_file) -> None:
    top = make_file("scss/top.scss", '@import "added";', mtime=BASE_MTIME)
    make_file("scss/_added.scss", "", mtime=ARTIFACT_MTIME + 5)
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)
    key = str(top.resolve())
    ledger = ModTimeLedger({key: BASE_MTIME})
    graph = DependencyGraph({key: []})

    assert is_fresh(_bundle(artifact, top), ledger=ledger, graph=graph)


def test_scripts_are_not_scanned_for_imports(make_file, touch, ledger, graph, parser) -> None:
    script = make_file("js/app.js", "@import 'dep';")
    dep = make_file("js/dep.js", "")
    artifact = make_file("cache/app.js", mtime=ARTIFACT_MTIME)
    touch(dep, ARTIFACT_MTIME + 1)

    assert is_fresh(_bundle(artifact, script), ledger=ledger, graph=graph)
    assert parser.calls == []


def test_subtree_memo_records_results(make_file, ledger, graph) -> None:
    top = make_file("scss/top.scss", '@import "child";').resolve()
    child = make_file("scss/_child.scss", "", mtime=ARTIFACT_MTIME + 1).resolve()
    memo: dict[Path, bool] = {}

    assert subtree_is_stale(top, ARTIFACT_MTIME, memo, ledger=ledger, graph=graph)
    assert memo == {top: True, child: True}


def test_failed_check_keeps_observed_entries(make_file, tmp_path: Path, ledger, graph, parser) -> None:
    shared = make_file("scss/shared.scss", '@import "vars";').resolve()
    make_file("scss/_vars.scss", "")
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)
    healthy = _bundle(artifact, shared)
    broken = _bundle(artifact, shared, tmp_path / "scss" / "missing.scss")
    assert is_fresh(healthy, ledger=ledger, graph=graph)
    scans = len(parser.calls)

    with pytest.raises(ResourceNotFoundError):
        is_fresh(broken, ledger=ledger, graph=graph)

    assert ledger.recorded_mtime(shared) == BASE_MTIME
    assert graph.has_entry(shared)
    assert is_fresh(healthy, ledger=ledger, graph=graph)
    assert len(parser.calls) == scans
