import json
from pathlib import Path

import pytest

from explorer.config import Config

PDF_BYTES = b"%PDF-1.4\n" + b"0" * 2048


def make_tree(root: Path) -> Path:
    """
    root/
      Intro Course/Week 1.pdf
      math/algebra/            (empty)
      math/calculus/limits.pdf, Notes.PDF, readme.txt
      math/overview.pdf
      physics/
      syllabus.pdf, notes.txt
    """
    (root / "math" / "algebra").mkdir(parents=True)
    (root / "math" / "calculus").mkdir(parents=True)
    (root / "physics").mkdir()
    (root / "Intro Course").mkdir()

    (root / "math" / "calculus" / "limits.pdf").write_bytes(PDF_BYTES)
    (root / "math" / "calculus" / "Notes.PDF").write_bytes(PDF_BYTES[:100])
    (root / "math" / "calculus" / "readme.txt").write_text("not a pdf")
    (root / "math" / "overview.pdf").write_bytes(PDF_BYTES)
    (root / "Intro Course" / "Week 1.pdf").write_bytes(PDF_BYTES)
    (root / "syllabus.pdf").write_bytes(PDF_BYTES)
    (root / "notes.txt").write_text("skip me")
    return root


@pytest.fixture
def content_root(tmp_path) -> Path:
    root = tmp_path / "academiadrive"
    root.mkdir()
    return make_tree(root)


@pytest.fixture
def links_file(tmp_path) -> Path:
    path = tmp_path / "driveLinks.json"
    path.write_text(json.dumps({
        "math": "https://drive.example.com/math",
        "math/calculus/limits.pdf": "https://drive.example.com/limits",
    }))
    return path


@pytest.fixture
def config(tmp_path, content_root, links_file) -> Config:
    return Config(
        content_root=content_root,
        links_path=links_file,
        manifest_path=tmp_path / "build" / "manifest.json",
        export_dir=tmp_path / "dist",
        explorer_prefix="/explorer",
        files_prefix="/academiadrive",
        site_title="AcademiaDrive Explorer",
        host="127.0.0.1",
        port=8000,
    )
