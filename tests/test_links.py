"""Tests for the external link mapping and its cache."""

import json

from explorer.links import LinkCache, load_links


def test_load_links(links_file):
    links = load_links(links_file)
    assert links["math"] == "https://drive.example.com/math"


def test_missing_file_is_empty(tmp_path):
    assert load_links(tmp_path / "missing.json") == {}


def test_malformed_json_is_empty(tmp_path):
    path = tmp_path / "links.json"
    path.write_text("{oops")
    assert load_links(path) == {}


def test_non_object_is_empty(tmp_path):
    path = tmp_path / "links.json"
    path.write_text('["a", "b"]')
    assert load_links(path) == {}


def test_non_string_values_dropped(tmp_path):
    path = tmp_path / "links.json"
    path.write_text(json.dumps({"a": "https://x", "b": 3, "c": None}))
    assert load_links(path) == {"a": "https://x"}


def test_cache_loads_once_until_invalidated(tmp_path):
    path = tmp_path / "links.json"
    path.write_text(json.dumps({"a": "one"}))

    cache = LinkCache(path)
    assert not cache.loaded
    assert cache.get() == {"a": "one"}

    path.write_text(json.dumps({"a": "two"}))
    assert cache.get() == {"a": "one"}

    cache.invalidate()
    assert cache.get() == {"a": "two"}
