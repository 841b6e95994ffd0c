"""Tests for XML rendering and the serialized sort key."""

from xmlsort.models import Attribute, Comment, Document, Node, ProcessingInstruction, Text
from xmlsort.serializer import (
    render_document,
    render_node,
    serialize_attribute,
    serialize_node,
)


def test_serialize_attribute():
    assert serialize_attribute(Attribute("x", "2")) == 'x="2"'
    assert serialize_attribute(Attribute("xml:space", "preserve")) == 'xml:space="preserve"'


def test_serialize_attribute_escapes():
    attr = Attribute("a", 'x<"&\n')
    assert serialize_attribute(attr) == 'a="x&lt;&quot;&amp;&#xA;"'


def test_serialize_node_compact():
    node = Node("r", [Attribute("a", "1")], [Node("b"), Text("hi & bye")])
    assert serialize_node(node) == '<r a="1"><b/>hi &amp; bye</r>'


def test_comments_and_processing_instructions():
    node = Node("r", children=[Comment(" c "), ProcessingInstruction("pi", "data"), ProcessingInstruction("bare")])
    assert serialize_node(node) == "<r><!-- c --><?pi data?><?bare?></r>"


def test_render_indented():
    node = Node("r", children=[Node("a"), Node("b", children=[Node("c")])])
    assert render_node(node, indent="  ") == "<r>\n  <a/>\n  <b>\n    <c/>\n  </b>\n</r>"


def test_render_indented_crlf():
    node = Node("r", children=[Node("a")])
    assert render_node(node, indent="\t", newline="\r\n") == "<r>\r\n\t<a/>\r\n</r>"


def test_render_mixed_content_inline():
    node = Node("p", children=[Text("Hello "), Node("b", children=[Text("x")])])
    assert render_node(node, indent="  ") == "<p>Hello <b>x</b></p>"


def test_render_preserve_scope_inline():
    inner = Node("n", [Attribute("xml:space", "preserve")], [Node("z", children=[Node("y")]), Node("a")])
    node = Node("r", children=[inner])
    assert render_node(node, indent="  ") == (
        '<r>\n  <n xml:space="preserve"><z><y/></z><a/></n>\n</r>'
    )


def test_render_ignored_node_inline():
    inner = Node("keep", children=[Text("\n  "), Node("z"), Text(" "), Node("a"), Text("\n")])
    node = Node("r", children=[Node("b"), inner])
    assert render_node(node, indent="  ", ignored_names={"keep"}) == (
        "<r>\n  <b/>\n  <keep>\n  <z/> <a/>\n</keep>\n</r>"
    )


def test_render_document_with_declaration():
    doc = Document(root=Node("r"), declaration='<?xml version="1.0"?>')
    assert render_document(doc) == '<?xml version="1.0"?>\r\n<r/>'


def test_render_document_without_declaration():
    doc = Document(root=Node("r", children=[Node("a")]))
    assert render_document(doc, indent="  ") == "<r>\n  <a/>\n</r>"


def test_render_document_with_doctype():
    doc = Document(root=Node("r"), declaration='<?xml version="1.0"?>', doctype="<!DOCTYPE r>")
    assert render_document(doc) == '<?xml version="1.0"?>\r\n<!DOCTYPE r>\n<r/>'
