# src/matcher/hasher.py
import logging
from typing import Set

from .keys import Key, combine_keys_loosely, combine_keys_uniquely, hash_string
from .model import Document, Node

logger = logging.getLogger(__name__)


def compute_attributes_key(node: Node) -> Key:
    """
    Digest of a node's attributes, independent of declaration order.

    Each name is bound to its own value with an order-sensitive combine before
    the pairs are XOR-ed together, so `x="1"` differs from `1="x"` and moving a
    value to another attribute name changes the result.
    """
    return combine_keys_loosely(*(
        combine_keys_uniquely(hash_string(name), hash_string(value))
        for name, value in node.attributes.items()
    ))


def compute_children_key(node: Node) -> Key:
    """Digest of a node's children, independent of their order. Leaves give 0."""
    return _children_key(node, set())


def compute_node_key(node: Node) -> Key:
    """
    Fingerprint of the subtree rooted at `node`.

    The four slots (name, text, attributes digest, children digest) are combined
    in a fixed order, so a node's own identity is position-sensitive while its
    attribute set and child set are not.

    Raises:
        ValueError: if a node is reachable from inside its own subtree.
    """
    return _node_key(node, set())


def compute_document_key(document: Document) -> Key:
    """Fingerprint of a document's root element."""
    key = compute_node_key(document.root)
    logger.debug("Computed key %016x for %s", key, document.label)
    return key


def _children_key(node: Node, active: Set[int]) -> Key:
    return combine_keys_loosely(*(_node_key(child, active) for child in node.children))


def _node_key(node: Node, active: Set[int]) -> Key:
    marker = id(node)
    if marker in active:
        raise ValueError(f"Cycle detected at <{node.name}>: a node cannot be its own descendant.")

    active.add(marker)
    try:
        children_key = _children_key(node, active)
    finally:
        active.discard(marker)

    return combine_keys_uniquely(
        hash_string(node.name),
        hash_string(node.text),
        compute_attributes_key(node),
        children_key,
    )
