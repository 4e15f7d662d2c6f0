"""Tests for the cache sidecar round trip and its failure handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from assetcache.bundles import BundleDescriptor
from assetcache.exceptions import PersistenceError
from assetcache.freshness.checker import is_fresh
from assetcache.freshness.graph import DependencyGraph
from assetcache.freshness.ledger import ModTimeLedger
from assetcache.freshness.store import load_payload, load_sidecar, save_sidecar, sidecar_path

ARTIFACT_MTIME = 1_700_000_100


def test_sidecar_path_is_fixed_under_cache_dir(tmp_path: Path) -> None:
    assert sidecar_path(tmp_path) == tmp_path / "assetcache" / "cache.json"


def test_missing_sidecar_loads_empty(tmp_path: Path) -> None:
    ledger, graph = load_sidecar(tmp_path / "cache.json")

    assert len(ledger) == 0
    assert len(graph) == 0


def test_save_writes_camel_case_keys(tmp_path: Path) -> None:
    path = sidecar_path(tmp_path)
    ledger = ModTimeLedger({"/abs/a.scss": 10})
    graph = DependencyGraph({"/abs/a.scss": ["/abs/_b.scss"]})

    save_sidecar(path, ledger, graph)

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "assetList": {"/abs/a.scss": 10},
        "assetChildren": {"/abs/a.scss": ["/abs/_b.scss"]},
    }
    assert list(path.parent.glob("*.tmp")) == []


def test_reload_gives_same_verdicts(make_file, touch, tmp_path: Path) -> None:
    base = make_file("scss/base.scss", '@import "vars";').resolve()
    partial = make_file("scss/_vars.scss", "").resolve()
    artifact = make_file("cache/app.css", mtime=ARTIFACT_MTIME)
    bundle = BundleDescriptor("id", "app.css", (base,), artifact)
    path = sidecar_path(tmp_path / "cache")

    ledger, graph = ModTimeLedger(), DependencyGraph()
    assert is_fresh(bundle, ledger=ledger, graph=graph)
    save_sidecar(path, ledger, graph)

    reloaded_ledger, reloaded_graph = load_sidecar(path)
    assert reloaded_graph.children_of(base) == (partial,)
    assert is_fresh(bundle, ledger=reloaded_ledger, graph=reloaded_graph)

    touch(partial, ARTIFACT_MTIME + 1)
    assert not is_fresh(bundle, ledger=reloaded_ledger, graph=reloaded_graph)


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '"text"',
    ],
    ids=["corrupt", "empty-list", "scalar"],
)
def test_invalid_sidecar_loads_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "cache.json"
    path.write_text(content, encoding="utf-8")

    ledger, graph = load_sidecar(path)

    assert len(ledger) == 0
    assert len(graph) == 0


def test_malformed_entries_are_dropped(tmp_path: Path) -> None:
    path = tmp_path / "cache.json"
    path.write_text(
        json.dumps(
            {
                "assetList": {"/a.css": 5, "/b.css": "soon", "/c.css": True},
                "assetChildren": [],
            }
        ),
        encoding="utf-8",
    )

    payload = load_payload(path)

    assert payload == {"assetList": {"/a.css": 5}, "assetChildren": {}}


def test_save_failure_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "cache"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(PersistenceError) as exc_info:
        save_sidecar(sidecar_path(blocker), ModTimeLedger(), DependencyGraph())

    assert "cache.json" in str(exc_info.value)
