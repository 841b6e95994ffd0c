"""Document model — the in-memory XML tree the canonicalizer operates on.

These models sit between the lxml parse tree and the serialized output.
Unlike lxml elements they can hold repeated attributes, which lets the
canonicalizer's dedup rules be applied to trees built in code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
XMLNS_NAMESPACE = "http://www.w3.org/2000/xmlns/"


def _split_name(name: str) -> tuple[str, str]:
    prefix, _, local = name.rpartition(":")
    return prefix, local


@dataclass
class Attribute:
    """A name/value pair attached to a single node."""

    name: str  # Qualified name as written, e.g. "xml:space"
    value: str
    namespace: str | None = None

    def __post_init__(self) -> None:
        # The xml and xmlns prefixes are bound by definition
        if self.namespace is None:
            if self.prefix == "xml":
                self.namespace = XML_NAMESPACE
            elif self.prefix == "xmlns" or self.name == "xmlns":
                self.namespace = XMLNS_NAMESPACE

    @property
    def local_name(self) -> str:
        return _split_name(self.name)[1]

    @property
    def prefix(self) -> str:
        return _split_name(self.name)[0]


@dataclass
class Text:
    """Character data inside a node."""

    value: str

    @property
    def is_whitespace(self) -> bool:
        return not self.value.strip()


@dataclass
class Comment:
    value: str


@dataclass
class ProcessingInstruction:
    target: str
    value: str = ""


@dataclass
class Node:
    """A named element with ordered attributes and ordered mixed content."""

    name: str  # Qualified name as written, e.g. "cfg:item"
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Content] = field(default_factory=list)
    namespace: str | None = None

    @property
    def local_name(self) -> str:
        return _split_name(self.name)[1]

    @property
    def prefix(self) -> str:
        return _split_name(self.name)[0]

    @property
    def elements(self) -> list[Node]:
        return [c for c in self.children if isinstance(c, Node)]

    @property
    def has_attributes(self) -> bool:
        return bool(self.attributes)

    @property
    def has_elements(self) -> bool:
        return any(isinstance(c, Node) for c in self.children)

    def get_attribute(self, local_name: str, namespace: str | None = None) -> Attribute | None:
        """Return the first attribute matching a local name and namespace URI."""
        for attr in self.attributes:
            if attr.local_name == local_name and attr.namespace == namespace:
                return attr
        return None


Content = Union[Node, Text, Comment, ProcessingInstruction]


@dataclass
class Document:
    """A root node plus the prolog text kept verbatim from the source."""

    root: Node
    declaration: str | None = None  # e.g. '<?xml version="1.0" encoding="utf-8"?>'
    doctype: str | None = None
    encoding: str | None = None  # Declared encoding, used when writing back


def is_preserved(node: Node) -> bool:
    """True if the node carries xml:space="preserve"."""
    attr = node.get_attribute("space", XML_NAMESPACE)
    return attr is not None and attr.value == "preserve"
