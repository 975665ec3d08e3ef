"""Shared fixtures: a small site tree on disk."""

from pathlib import Path

import pytest

CSS = b"body { color: red; }\n" * 40
JS = b"console.log('hello');\n" * 40
PNG = b"\x89PNG\r\n\x1a\n" + bytes(range(256))


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A directory tree covering every walker classification."""
    root = tmp_path / "www"
    root.mkdir()

    (root / "index.html").write_bytes(b"<h1>Home</h1>")
    (root / "style.css").write_bytes(CSS)
    (root / "app.js").write_bytes(JS)
    (root / "a.json").write_bytes(b'{"a":true}\r\n')
    (root / "logo.png").write_bytes(PNG)

    # Unrecognized extensions and extensionless files are dropped
    (root / "notes.unknown").write_bytes(b"nope")
    (root / "README").write_bytes(b"nope")

    # Hidden entries are dropped with their subtrees
    (root / ".secret.css").write_bytes(b"hidden")
    hidden = root / ".git"
    hidden.mkdir()
    (hidden / "config.js").write_bytes(b"hidden")

    docs = root / "docs"
    docs.mkdir()
    (docs / "index.html").write_bytes(b"<h1>Docs</h1>")
    (docs / "guide.md").write_bytes(b"# Guide\n")

    (root / "empty").mkdir()

    deep = root / "nested" / "deep"
    deep.mkdir(parents=True)
    (deep / "x.txt").write_bytes(b"deep text\n")

    return root
