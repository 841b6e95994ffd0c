"""Tests for the tree walker: single documents, files and directory runs."""

import tempfile
from pathlib import Path

import pytest

from xmlsort.config import Settings
from xmlsort.errors import DocumentIOError, DocumentParseError
from xmlsort.models import Document, Node
from xmlsort.serializer import serialize_node
from xmlsort.walker import TreeWalker

COMPACT = Settings(indent=None)
UNSORTED = '<?xml version="1.0" encoding="utf-8"?>\n<r><b x="2"/><a/></r>'
SORTED = b'<?xml version="1.0" encoding="utf-8"?>\r\n<r><a/><b x="2"/></r>'


def test_process_document_keeps_prolog():
    doc = Document(
        root=Node("r", children=[Node("b"), Node("a")]),
        declaration='<?xml version="1.0"?>',
        doctype="<!DOCTYPE r>",
    )
    result = TreeWalker().process_document(doc)

    assert result.declaration == '<?xml version="1.0"?>'
    assert result.doctype == "<!DOCTYPE r>"
    assert result.root is doc.root
    assert serialize_node(result.root) == "<r><a/><b/></r>"


def test_process_document_uses_ignore_set():
    doc = Document(root=Node("r", children=[Node("b"), Node("a")]))
    TreeWalker(["r"]).process_document(doc)
    assert serialize_node(doc.root) == "<r><b/><a/></r>"


def test_process_file_in_place():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "a.xml"
        path.write_text(UNSORTED)

        result = TreeWalker(settings=COMPACT).process_file(path)

        assert result.changed
        assert path.read_bytes() == SORTED


def test_process_file_indented_by_default():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "a.xml"
        path.write_text("<r><b/><a/></r>")

        TreeWalker().process_file(path)

        assert path.read_text() == "<r>\n  <a/>\n  <b/>\n</r>"


def test_process_file_twice_is_stable():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "a.xml"
        path.write_text(UNSORTED)
        walker = TreeWalker()

        walker.process_file(path)
        first = path.read_bytes()
        result = walker.process_file(path)

        assert not result.changed
        assert path.read_bytes() == first


def test_process_tree_filters_by_extension():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "a.xml").write_text(UNSORTED)
        (root / "b.txt").write_text(UNSORTED)
        (root / "sub").mkdir()
        (root / "sub" / "c.xml").write_text(UNSORTED)

        results = TreeWalker(settings=COMPACT).process_tree(root, ["xml"])

        assert [r.path for r in results] == [root / "a.xml", root / "sub" / "c.xml"]
        assert (root / "a.xml").read_bytes() == SORTED
        assert (root / "sub" / "c.xml").read_bytes() == SORTED
        assert (root / "b.txt").read_text() == UNSORTED


def test_process_tree_uses_configured_extensions():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "a.xml").write_text(UNSORTED)
        (root / "b.config").write_text(UNSORTED)

        walker = TreeWalker(settings=Settings(indent=None, extensions=["config"]))
        results = walker.process_tree(root)

        assert [r.path.name for r in results] == ["b.config"]
        assert (root / "a.xml").read_text() == UNSORTED


def test_process_tree_missing_root():
    with pytest.raises(DocumentIOError):
        TreeWalker().process_tree("/nonexistent/dir", ["xml"])


def test_process_tree_aborts_on_first_failure():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "a.xml").write_text(UNSORTED)
        (root / "b.xml").write_text("<r><unclosed></r>")
        (root / "c.xml").write_text(UNSORTED)

        with pytest.raises(DocumentParseError):
            TreeWalker(settings=COMPACT).process_tree(root, ["xml"])

        # Earlier files stay rewritten, later ones are never attempted
        assert (root / "a.xml").read_bytes() == SORTED
        assert (root / "c.xml").read_text() == UNSORTED


def test_ignored_node_written_back_as_stored():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "a.xml"
        path.write_text("<r>\n<keep>\n    <z/>   <a/>\n</keep>\n<b/>\n</r>")

        TreeWalker(["keep"]).process_file(path)

        assert path.read_text() == "<r>\n  <b/>\n  <keep>\n    <z/>   <a/>\n</keep>\n</r>"
