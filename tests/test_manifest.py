"""Tests for the build-time manifest."""

import json
import os

import pytest

from explorer.errors import ContentRootMissing, FolderNotFound, ManifestError
from explorer.manifest import Manifest, build_manifest, read_manifest, write_manifest
from explorer.tree import FolderListing, enumerate_folders


@pytest.fixture
def manifest(content_root):
    return build_manifest(content_root)


def test_one_page_per_folder_plus_root(manifest, content_root):
    routes = manifest.routes()
    assert routes[0] == ""
    assert sorted(routes[1:]) == sorted(enumerate_folders(content_root))
    assert len(routes) == len(set(routes))


def test_counts(manifest):
    # syllabus, overview, limits, Notes, Week 1
    assert manifest.file_count == 5
    assert manifest.total_bytes > 0


def test_listing_lookup(manifest):
    listing = manifest.listing("/math/calculus/")
    assert [f.name for f in listing.files] == ["limits.pdf", "Notes.PDF"]
    assert manifest.listing("").folders[0].name == "Intro Course"


def test_listing_unknown_folder(manifest):
    with pytest.raises(FolderNotFound):
        manifest.listing("math/topology")
    with pytest.raises(FolderNotFound):
        manifest.listing("../outside")


def test_find_file(manifest):
    entry = manifest.find_file("Intro Course/Week 1.pdf")
    assert entry is not None
    assert entry.name == "Week 1.pdf"
    assert manifest.find_file("math/calculus/readme.txt") is None
    assert manifest.find_file("nope/x.pdf") is None
    assert manifest.find_file("") is None


def test_missing_root(tmp_path):
    with pytest.raises(ContentRootMissing):
        build_manifest(tmp_path / "missing")


def test_write_then_read(manifest, tmp_path):
    path = write_manifest(manifest, tmp_path / "out" / "manifest.json")
    assert path.exists()

    loaded = read_manifest(path)
    assert loaded.routes() == manifest.routes()
    assert loaded.listing("math/calculus") == manifest.listing("math/calculus")
    assert loaded.generated_at == manifest.generated_at


def test_manifest_paths_are_relative(manifest, tmp_path):
    path = write_manifest(manifest, tmp_path / "manifest.json")
    data = json.loads(path.read_text())
    for listing in data["folders"].values():
        for entry in listing["folders"] + listing["files"]:
            assert not entry["path"].startswith("/")


def test_read_missing_manifest(tmp_path):
    assert read_manifest(tmp_path / "none.json") is None


@pytest.mark.parametrize("content", ["{not json", "[]", '{"folders": {}}'])
def test_read_invalid_manifest(tmp_path, content):
    path = tmp_path / "manifest.json"
    path.write_text(content)
    with pytest.raises(ManifestError):
        read_manifest(path)


def test_unusable_manifest_path(tmp_path):
    path = tmp_path / "manifest.json"
    path.mkdir()
    with pytest.raises(ManifestError):
        read_manifest(path)


def test_non_utf8_tree_builds_and_writes(content_root, tmp_path):
    try:
        os.mkdir(os.fsencode(content_root) + b"/caf\xe9")
    except (OSError, ValueError):
        pytest.skip("filesystem rejects non-UTF-8 names")

    path = write_manifest(build_manifest(content_root), tmp_path / "m.json")
    assert read_manifest(path).routes() == build_manifest(content_root).routes()
    assert not (tmp_path / "m.tmp").exists()


def test_failed_write_leaves_no_temp_file(tmp_path):
    broken = Manifest(content_root="x", folders={"\udce9": FolderListing(path="\udce9")})
    with pytest.raises(UnicodeEncodeError):
        write_manifest(broken, tmp_path / "m.json")
    assert not (tmp_path / "m.tmp").exists()
    assert not (tmp_path / "m.json").exists()


@pytest.mark.skipif(os.sep == "\\", reason="backslash is a separator on Windows")
def test_backslash_folder_gets_a_page(tmp_path):
    (tmp_path / "a\\b").mkdir()
    manifest = build_manifest(tmp_path)
    assert manifest.routes() == ["", "a\\b"]
    assert manifest.listing("").folders[0].path == "a\\b"
