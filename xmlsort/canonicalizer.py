"""Canonicalizer — sort and deduplicate one XML tree in place.

A node is either exempt (its local name is in the ignore set, or it carries
``xml:space="preserve"``) and left completely untouched, subtree included,
or it is normalized:

1. attributes sorted by their serialized ``name="value"`` form, exact
   duplicates dropped;
2. every child element canonicalized first, so its serialized form is final;
3. child elements sorted by their full serialized form, exact duplicate
   subtrees dropped.

Ordering is plain code-point order over the serialized strings, which gives
a total order even among same-named siblings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from xmlsort.models import Node, is_preserved
from xmlsort.serializer import serialize_attribute, serialize_node

logger = logging.getLogger(__name__)

T = TypeVar("T")


def canonicalize(node: Node, ignored_names: Iterable[str] = ()) -> Node:
    """Canonicalize a node and its descendants. Returns the same node."""
    ignored = ignored_names if isinstance(ignored_names, (set, frozenset)) else set(ignored_names)
    return _canonicalize(node, ignored)


def is_exempt(node: Node, ignored_names: set[str] | frozenset[str]) -> bool:
    """Decide, before any mutation, whether a node's subtree is left as is."""
    if node.local_name in ignored_names:
        logger.debug("Skipping <%s>: name is ignored", node.name)
        return True
    if is_preserved(node):
        logger.debug("Skipping <%s>: xml:space=\"preserve\"", node.name)
        return True
    return False


def sorted_unique(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Sort items by a string key and drop any item whose key equals the last kept one."""
    kept: list[T] = []
    previous: str | None = None
    for item, item_key in sorted(((i, key(i)) for i in items), key=lambda pair: pair[1]):
        if item_key != previous:
            kept.append(item)
            previous = item_key
    return kept


def _canonicalize(node: Node, ignored: set[str] | frozenset[str]) -> Node:
    if is_exempt(node, ignored):
        return node

    if node.has_attributes:
        node.attributes = sorted_unique(node.attributes, serialize_attribute)

    if node.has_elements:
        elements = node.elements
        for child in elements:
            _canonicalize(child, ignored)
        # Only elements survive; text, comments and PIs between them are dropped
        node.children = sorted_unique(elements, serialize_node)

    return node
