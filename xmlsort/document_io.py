"""Document I/O — turn files into Document models and back.

Parsing is done by lxml; the resulting element tree is copied into the
xmlsort model so the canonicalizer never touches lxml objects. Whitespace
only text is dropped outside ``xml:space="preserve"`` scopes and outside
ignored subtrees; everything else is re-indented on output.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from xmlsort.errors import DocumentIOError, DocumentParseError
from xmlsort.models import (
    XML_NAMESPACE,
    Attribute,
    Comment,
    Content,
    Document,
    Node,
    ProcessingInstruction,
    Text,
)
from xmlsort.serializer import render_document

logger = logging.getLogger(__name__)

_DECLARATION = re.compile(r"<\?xml\s.*?\?>", re.DOTALL)
_SPACE = f"{{{XML_NAMESPACE}}}space"


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        no_network=True,
        remove_comments=False,
        remove_pis=False,
        strip_cdata=True,
    )


# ── Reading ──────────────────────────────────────────────────────────


def read_bytes(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise DocumentIOError(path, e.strerror or str(e)) from e


def parse_document(
    raw: bytes, source: str = "<string>", ignored_names: Iterable[str] = ()
) -> Document:
    """Parse raw XML bytes into a Document.

    The ``<?xml ...?>`` declaration is kept verbatim; comments and processing
    instructions outside the root element are not kept. Subtrees whose local
    name is in ``ignored_names`` keep all their text, whitespace included.
    """
    try:
        root = etree.fromstring(raw, _make_parser())
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(source, str(e)) from e

    docinfo = root.getroottree().docinfo
    declaration = _read_declaration(raw, docinfo.encoding)
    converter = _Converter(frozenset(ignored_names), source)

    return Document(
        root=converter.convert(root, keep_space=False, verbatim=False),
        declaration=declaration,
        doctype=docinfo.doctype or None,
        encoding=docinfo.encoding if declaration else None,
    )


def _read_declaration(raw: bytes, encoding: str | None) -> str | None:
    try:
        text = raw.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        text = raw.decode("utf-8", errors="replace")
    match = _DECLARATION.match(text.lstrip("\ufeff"))
    return match.group(0) if match else None


class _Converter:
    """Copies an lxml element tree into Node models."""

    def __init__(self, ignored: frozenset[str], source: str):
        self.ignored = ignored
        self.source = source

    def convert(self, el: etree._Element, keep_space: bool, verbatim: bool) -> Node:
        qname = etree.QName(el)
        space = el.get(_SPACE)
        if space is not None:
            keep_space = space == "preserve"
        verbatim = verbatim or qname.localname in self.ignored
        keep = keep_space or verbatim

        attributes = _namespace_declarations(el)
        for key, value in el.attrib.items():
            aname = etree.QName(key)
            if aname.namespace is None:
                attributes.append(Attribute(aname.localname, value))
            else:
                prefix = self._prefix_for(el, aname.namespace)
                attributes.append(Attribute(f"{prefix}:{aname.localname}", value, aname.namespace))

        children: list[Content] = []
        if el.text and (keep or el.text.strip()):
            children.append(Text(el.text))
        for child in el:
            if isinstance(child, etree._Comment):
                children.append(Comment(child.text or ""))
            elif isinstance(child, etree._ProcessingInstruction):
                children.append(ProcessingInstruction(child.target, child.text or ""))
            elif isinstance(child, etree._Entity):
                raise DocumentParseError(self.source, f"unresolved entity reference {child.text}")
            else:
                children.append(self.convert(child, keep_space, verbatim))
            if child.tail and (keep or child.tail.strip()):
                children.append(Text(child.tail))

        name = f"{el.prefix}:{qname.localname}" if el.prefix else qname.localname
        return Node(name=name, attributes=attributes, children=children, namespace=qname.namespace)

    def _prefix_for(self, el: etree._Element, namespace: str) -> str:
        if namespace == XML_NAMESPACE:
            return "xml"
        for prefix, uri in el.nsmap.items():
            if uri == namespace and prefix is not None:
                return prefix
        raise DocumentParseError(self.source, f"no prefix bound for namespace {namespace}")


def _namespace_declarations(el: etree._Element) -> list[Attribute]:
    """Namespace declarations made on this element, as xmlns attributes."""
    parent = el.getparent()
    inherited = parent.nsmap if parent is not None else {}
    declared = []
    for prefix, uri in el.nsmap.items():
        if inherited.get(prefix) != uri:
            declared.append(Attribute("xmlns" if prefix is None else f"xmlns:{prefix}", uri))
    return declared


# ── Writing ──────────────────────────────────────────────────────────


def dump_document(
    document: Document,
    indent: str | None = None,
    newline: str = "\n",
    ignored_names: Iterable[str] = (),
) -> bytes:
    """Render a document and encode it in its declared encoding (UTF-8 if none).

    Nodes named in ``ignored_names`` are written exactly as stored.
    """
    text = render_document(document, indent=indent, newline=newline, ignored_names=ignored_names)
    encoding = document.encoding or "utf-8"
    try:
        return text.encode(encoding, errors="xmlcharrefreplace")
    except LookupError:
        logger.warning("Unknown encoding %r, writing UTF-8 instead", encoding)
        return text.encode("utf-8", errors="xmlcharrefreplace")


def write_bytes(path: str | Path, data: bytes) -> None:
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise DocumentIOError(path, e.strerror or str(e)) from e
