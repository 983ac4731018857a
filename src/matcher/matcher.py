# src/matcher/matcher.py
import logging

from .hasher import compute_node_key
from .model import Document

logger = logging.getLogger(__name__)


def match_documents_loosely(lhs: Document, rhs: Document) -> bool:
    """
    Returns True if both documents are equal up to the order of attributes and
    the order of sibling elements, at every level.

    Any difference in element names, inline text, attribute name/value pairs or
    nesting makes the documents different (barring a hash collision).
    """
    lhs_key = compute_node_key(lhs.root)
    rhs_key = compute_node_key(rhs.root)

    logger.debug("Matching %s (%016x) against %s (%016x)", lhs.label, lhs_key, rhs.label, rhs_key)
    return lhs_key == rhs_key
