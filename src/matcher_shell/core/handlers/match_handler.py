# src/matcher_shell/core/handlers/match_handler.py
from __future__ import annotations

import argparse
import logging
from typing import List

from matcher.hasher import compute_document_key
from matcher.matcher import match_documents_loosely
from matcher_shell.core.managers.config_manager import config_manager
from matcher_shell.core.utils.path_utils import PathUtils
from xml_loader.services.xml_load_service import XmlLoadService

logger = logging.getLogger(__name__)

match_help_text = """
  match <lhs.xml> <rhs.xml> [--keys] [--trim-text]
      Compares two XML documents, ignoring attribute order and sibling order.
      Exit status: 0 equivalent, 1 different, 2 error.
""".strip("\n")
COMMAND_HIERARCHY = None

EXIT_EQUIVALENT = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def handle_match(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="match", description="Loosely compare two XML documents.")
    parser.add_argument("lhs", help="Path of the first document.")
    parser.add_argument("rhs", help="Path of the second document.")
    parser.add_argument("--keys", action="store_true", help="Also print both root fingerprints.")
    parser.add_argument("--trim-text", action="store_true",
                        help="Strip surrounding whitespace from inline text (default: loader.trim_text).")

    if not args:
        parser.print_help()
        return EXIT_ERROR

    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return EXIT_ERROR

    trim_text = pargs.trim_text or bool(config_manager.get_nested("loader.trim_text", False))
    loader = XmlLoadService(trim_text=trim_text)

    try:
        lhs_doc = loader.load_file(PathUtils.resolve_user_path(pargs.lhs))
        rhs_doc = loader.load_file(PathUtils.resolve_user_path(pargs.rhs))
        equivalent = match_documents_loosely(lhs_doc, rhs_doc)
    except (OSError, ValueError) as e:
        logger.error("Match failed: %s", e, exc_info=True)
        print(f"❌ Error: {e}")
        return EXIT_ERROR

    if pargs.keys:
        print(f"  {compute_document_key(lhs_doc):016x}  {pargs.lhs}")
        print(f"  {compute_document_key(rhs_doc):016x}  {pargs.rhs}")

    if equivalent:
        print(f"✅ [{pargs.lhs}] == [{pargs.rhs}]: equivalent")
        return EXIT_EQUIVALENT

    print(f"❌ [{pargs.lhs}] != [{pargs.rhs}]: different")
    return EXIT_DIFFERENT
