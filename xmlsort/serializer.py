"""Serializer — render documents, nodes and attributes as XML text.

The compact rendering of a node doubles as its sort and equality key in the
canonicalizer, so it has to be a pure function of the node: same node, same
string, every time. Pretty-printed output only differs from the key form by
the whitespace placed between block-level children.
"""

from __future__ import annotations

from collections.abc import Iterable
from xml.sax.saxutils import escape

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

# Declaration and tree are always joined with CR+LF
DECLARATION_SEPARATOR = "\r\n"

_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\t": "&#x9;", "\n": "&#xA;", "\r": "&#xD;"}


def escape_text(value: str) -> str:
    return escape(value)


def escape_attribute(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


def serialize_attribute(attr: Attribute) -> str:
    """Render an attribute as ``name="value"``, prefix included."""
    return f'{attr.name}="{escape_attribute(attr.value)}"'


def serialize_node(node: Node) -> str:
    """Render a node and its whole subtree compactly, with no added whitespace."""
    return render_node(node)


def render_node(
    node: Node,
    indent: str | None = None,
    newline: str = "\n",
    ignored_names: Iterable[str] = (),
) -> str:
    """Render a node, pretty-printing block content when ``indent`` is given.

    Content is always written inline as stored for nodes holding
    non-whitespace text, nodes inside an ``xml:space="preserve"`` scope and
    nodes whose local name is in ``ignored_names``.
    """
    out: list[str] = []
    ignored = frozenset(ignored_names)
    _write(node, out, indent, newline, ignored, depth=0, inline=indent is None, preserve=False)
    return "".join(out)


def render_document(
    document: Document,
    indent: str | None = None,
    newline: str = "\n",
    ignored_names: Iterable[str] = (),
) -> str:
    """Render a full document: declaration, doctype, then the root tree."""
    parts = []
    if document.declaration:
        parts.append(document.declaration + DECLARATION_SEPARATOR)
    if document.doctype:
        parts.append(document.doctype + newline)
    parts.append(render_node(document.root, indent, newline, ignored_names))
    return "".join(parts)


def _write(
    item: Content,
    out: list[str],
    indent: str | None,
    newline: str,
    ignored: frozenset[str],
    depth: int,
    inline: bool,
    preserve: bool,
) -> None:
    if isinstance(item, Text):
        out.append(escape_text(item.value))
    elif isinstance(item, Comment):
        out.append(f"<!--{item.value}-->")
    elif isinstance(item, ProcessingInstruction):
        data = f" {item.value}" if item.value else ""
        out.append(f"<?{item.target}{data}?>")
    else:
        _write_node(item, out, indent, newline, ignored, depth, inline, preserve)


def _write_node(
    node: Node,
    out: list[str],
    indent: str | None,
    newline: str,
    ignored: frozenset[str],
    depth: int,
    inline: bool,
    preserve: bool,
) -> None:
    start = "<" + node.name + "".join(" " + serialize_attribute(a) for a in node.attributes)
    if not node.children:
        out.append(start + "/>")
        return

    space = node.get_attribute("space", XML_NAMESPACE)
    if space is not None:
        preserve = space.value == "preserve"
    inline = (
        inline
        or preserve
        or node.local_name in ignored
        or any(isinstance(c, Text) and not c.is_whitespace for c in node.children)
    )

    out.append(start + ">")
    if inline:
        for child in node.children:
            _write(child, out, indent, newline, ignored, depth + 1, True, preserve)
    else:
        for child in node.children:
            if isinstance(child, Text):
                continue  # whitespace only, replaced by indentation
            out.append(newline + indent * (depth + 1))
            _write(child, out, indent, newline, ignored, depth + 1, False, preserve)
        out.append(newline + indent * depth)
    out.append(f"</{node.name}>")
