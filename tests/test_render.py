"""Tests for response metadata of served artifacts."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from assetcache.exceptions import ConfigError, ResourceNotFoundError
from assetcache.render import is_not_modified, resolve_render_options, response_headers

BASE_MTIME = 1_700_000_000
BASE_HTTP_DATE = "Tue, 14 Nov 2023 22:13:20 GMT"


@pytest.fixture()
def artifact(make_file) -> Path:
    return make_file("cache/assetcache/app-abc.css", "a{}", mtime=BASE_MTIME)


def test_resolve_render_options_from_config_ages(artifact: Path) -> None:
    options = resolve_render_options(
        bundle_id="abc",
        web_path="/_assets/app-abc.css?v=1",
        cache_path=artifact,
        cache_ages={"css": 600},
    )

    assert options.filename == "app-abc"
    assert options.ext == "css"
    assert options.mime_type == "text/css"
    assert options.cache_age == 600
    assert options.modified == BASE_MTIME
    assert options.etag == hashlib.md5(f"abc_{BASE_MTIME}".encode()).hexdigest()


def test_explicit_values_override_defaults(artifact: Path) -> None:
    options = resolve_render_options(
        bundle_id="abc",
        web_path="/files/data.txt",
        cache_path=artifact,
        cache_age=5,
        mime_type="text/plain",
    )

    assert (options.cache_age, options.mime_type) == (5, "text/plain")


@pytest.mark.parametrize(
    ("kwargs", "expected_match"),
    [
        ({"bundle_id": "", "web_path": "/a.css", "cache_age": 1}, "bundle_id"),
        ({"bundle_id": "abc", "web_path": "", "cache_age": 1}, "web_path"),
        ({"bundle_id": "abc", "web_path": "/a.css"}, "cache age"),
        ({"bundle_id": "abc", "web_path": "/a.txt", "cache_age": 1}, "MIME"),
    ],
    ids=["missing_bundle_id", "missing_web_path", "missing_cache_age", "unknown_mime"],
)
def test_resolve_render_options_requires_metadata(artifact: Path, kwargs: dict, expected_match: str) -> None:
    with pytest.raises(ConfigError, match=expected_match):
        resolve_render_options(cache_path=artifact, **kwargs)


def test_missing_artifact_raises(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        resolve_render_options(bundle_id="abc", web_path="/a.css", cache_path=tmp_path / "gone.css", cache_age=1)


def test_response_headers(artifact: Path) -> None:
    options = resolve_render_options(bundle_id="abc", web_path="/a.css", cache_path=artifact, cache_age=60)

    headers = response_headers(options)

    assert headers["Last-Modified"] == BASE_HTTP_DATE
    assert headers["ETag"] == f'"{options.etag}"'
    assert headers["Cache-Control"] == "public, max-age=60"
    assert headers["Content-Type"] == "text/css"
    assert headers["Content-Disposition"] == 'inline; filename="a.css"'


@pytest.mark.parametrize(
    ("if_modified_since", "if_none_match", "expected"),
    [
        (None, None, False),
        (BASE_HTTP_DATE, None, True),
        ("Tue, 14 Nov 2023 22:13:19 GMT", None, False),
        ("Wed, 15 Nov 2023 00:00:00 GMT", None, True),
        ("not a date", None, False),
        (None, "stale-tag", False),
    ],
    ids=["no_validators", "same_date", "older_date", "newer_date", "garbage_date", "other_etag"],
)
def test_is_not_modified_by_date(
    artifact: Path,
    if_modified_since: str | None,
    if_none_match: str | None,
    expected: bool,
) -> None:
    options = resolve_render_options(bundle_id="abc", web_path="/a.css", cache_path=artifact, cache_age=60)

    assert is_not_modified(options, if_modified_since=if_modified_since, if_none_match=if_none_match) is expected


def test_is_not_modified_by_etag(artifact: Path) -> None:
    options = resolve_render_options(bundle_id="abc", web_path="/a.css", cache_path=artifact, cache_age=60)

    assert is_not_modified(options, if_none_match=f'"{options.etag}"')
