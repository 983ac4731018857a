# src/xml_loader/services/xml_load_service.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ParserRejectedMarkup,
    ProcessingInstruction,
    Tag,
)
from lxml import etree

from matcher.model import Document, Node

logger = logging.getLogger(__name__)

# Markup constructs that are strings to BeautifulSoup but never element text.
_NON_TEXT_STRINGS = (Comment, ProcessingInstruction, Declaration, Doctype)


class XmlLoadService:
    """
    Turns XML markup into the `Document`/`Node` model used by the matcher.

    Only elements, their attributes and their inline text survive the mapping;
    comments, processing instructions and the prolog are dropped.
    """

    def __init__(self, trim_text: bool = False):
        self.trim_text = trim_text

    def load_file(self, path: Union[str, Path]) -> Document:
        """
        Reads and maps an XML file.

        The file is read as bytes so the parser can honour the encoding declared
        in the XML prolog.

        Raises:
            FileNotFoundError: if `path` does not exist.
            ValueError: if the file contains no root element.
        """
        file_path = Path(path)
        raw = file_path.read_bytes()
        logger.debug("Loaded %d bytes from %s", len(raw), file_path)
        return self.load_string(raw, source=str(file_path))

    def load_string(self, markup: Union[str, bytes], source: Optional[str] = None) -> Document:
        """
        Maps XML markup onto a Document.

        Args:
            markup (str | bytes): The raw XML.
            source (Optional[str]): A label for the document, used in messages.

        Returns:
            Document: The mapped document tree.

        Raises:
            ValueError: if the markup is empty or not well-formed XML.
        """
        if not markup or not markup.strip():
            raise ValueError(f"No root element found in {source or 'markup'}: document is empty.")

        self._check_well_formed(markup, source)

        try:
            soup = BeautifulSoup(markup, "xml")
        except ParserRejectedMarkup as e:
            raise ValueError(f"Could not parse {source or 'markup'}: {e}") from e

        root_tag = next((item for item in soup.contents if isinstance(item, Tag)), None)
        if root_tag is None:
            raise ValueError(f"No root element found in {source or 'markup'}.")

        return Document(root=self._build_node(root_tag), source=source)

    @staticmethod
    def _check_well_formed(markup: Union[str, bytes], source: Optional[str]) -> None:
        """
        Strict parse ahead of the soup. BeautifulSoup runs lxml in recover mode,
        which would quietly close a truncated document.
        """
        if isinstance(markup, str):
            # Decoded text: the prolog's encoding declaration no longer applies.
            data = markup.encode("utf-8")
            parser = etree.XMLParser(recover=False, resolve_entities=False, encoding="utf-8")
        else:
            data = markup
            parser = etree.XMLParser(recover=False, resolve_entities=False)

        try:
            etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            raise ValueError(f"Malformed XML in {source or 'markup'}: {e}") from e

    def _build_node(self, tag: Tag) -> Node:
        """Recursively maps a BeautifulSoup Tag (and its element children) onto a Node."""
        children = [self._build_node(child) for child in tag.children if isinstance(child, Tag)]

        return Node(
            name=self._qualified_name(tag),
            text=self._inline_text(tag),
            attributes=self._attributes(tag),
            children=children,
        )

    @staticmethod
    def _qualified_name(tag: Tag) -> str:
        if tag.prefix and not tag.name.startswith(f"{tag.prefix}:"):
            return f"{tag.prefix}:{tag.name}"
        return tag.name

    @staticmethod
    def _attributes(tag: Tag) -> Dict[str, str]:
        attributes: Dict[str, str] = {}
        for name, value in tag.attrs.items():
            if isinstance(value, (list, tuple)):
                value = " ".join(value)
            attributes[str(name)] = str(value)
        return attributes

    def _inline_text(self, tag: Tag) -> str:
        """
        Returns the value of the first direct text child, skipping whitespace-only
        runs between elements. CDATA sections always count as text.

        lxml reports a CDATA section and the plain text around it as one run, so
        `<a>foo<![CDATA[bar]]></a>` yields "foobar".
        """
        for child in tag.children:
            if not isinstance(child, NavigableString) or isinstance(child, _NON_TEXT_STRINGS):
                continue
            if isinstance(child, CData) or child.strip():
                return child.strip() if self.trim_text else str(child)
        return ""
