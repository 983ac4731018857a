# src/matcher_shell/core/handlers/key_handler.py
from __future__ import annotations

import argparse
import logging
from typing import List

from matcher.hasher import compute_attributes_key, compute_node_key
from matcher_shell.core.managers.config_manager import config_manager
from matcher_shell.core.utils.path_utils import PathUtils
from xml_loader.services.xml_load_service import XmlLoadService

logger = logging.getLogger(__name__)

key_help_text = """
  key <file.xml> [--children] [--trim-text]
      Prints the fingerprint of the document's root element. With --children,
      also prints the fingerprint of each direct child element.
""".strip("\n")
COMMAND_HIERARCHY = None


def handle_key(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="key", description="Print the fingerprint of an XML document.")
    parser.add_argument("path", help="Path of the document.")
    parser.add_argument("--children", action="store_true", help="Also list the keys of the root's children.")
    parser.add_argument("--trim-text", action="store_true",
                        help="Strip surrounding whitespace from inline text (default: loader.trim_text).")

    if not args:
        parser.print_help()
        return 2

    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return 2

    trim_text = pargs.trim_text or bool(config_manager.get_nested("loader.trim_text", False))

    try:
        document = XmlLoadService(trim_text=trim_text).load_file(PathUtils.resolve_user_path(pargs.path))
        root_key = compute_node_key(document.root)
    except (OSError, ValueError) as e:
        logger.error("Key computation failed: %s", e, exc_info=True)
        print(f"❌ Error: {e}")
        return 2

    element_count = sum(1 for _ in document.root.iter_subtree())
    print(f"{root_key:016x}  {pargs.path} ({element_count} elements)")

    if pargs.children:
        print(f"  attributes  {compute_attributes_key(document.root):016x}")
        for child in document.root.children:
            print(f"  <{child.name}>  {compute_node_key(child):016x}")

    return 0
