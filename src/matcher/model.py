# src/matcher/model.py
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Node(BaseModel):
    """
    A single element of a hierarchical document.

    Only the element name, its own inline text, its attributes and its child
    elements take part in matching. Attribute and child order are kept (they are
    part of the source document) but never influence the fingerprint.
    """
    name: str = Field(min_length=1)
    text: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict)
    children: List[Node] = Field(default_factory=list)

    def iter_subtree(self):
        """Yields this node and all of its descendants, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class Document(BaseModel):
    """
    A parsed document: one root element.

    `source` is a free-form label (usually the file path) used for log and report
    messages only.
    """
    root: Node
    source: Optional[str] = None

    @property
    def label(self) -> str:
        return self.source or f"<{self.root.name}>"


Node.model_rebuild()
