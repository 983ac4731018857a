# ============================================
# file: src/matcher_shell/core/handlers/suite_handler.py
# ============================================
from __future__ import annotations

import argparse
import logging
from typing import List

from match_suite.controllers.suite_controller import SuiteController
from matcher_shell.core.managers.config_manager import config_manager
from matcher_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

suite_help_text = """
  suite run <manifest.json> [--workers <N>] [--export <file.csv>] [--no-progress] [--trim-text]
      Runs every document pair listed in a manifest and prints PASSED/FAILED
      per case. Exit status is 0 only if every case passed.
""".strip("\n")
COMMAND_HIERARCHY = {"run": None}


def handle_suite(args: List[str]) -> int:
    parser = argparse.ArgumentParser(prog="suite", description="Run a manifest of document pairs.")
    subs = parser.add_subparsers(dest="subcommand", help="Sub-command help")

    p_run = subs.add_parser("run", help="Run a manifest.")
    p_run.add_argument("manifest", help="Path of the JSON manifest.")
    p_run.add_argument("--workers", type=int, default=None,
                       help="Number of parallel processes (default: suite.workers).")
    p_run.add_argument("--export", metavar="CSV", default=None, help="Write the results to a CSV file.")
    p_run.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    p_run.add_argument("--trim-text", action="store_true",
                       help="Strip surrounding whitespace from inline text (default: loader.trim_text).")

    if not args:
        parser.print_help()
        return 1

    try:
        pargs = parser.parse_args(args)
    except SystemExit:
        return 1

    if pargs.subcommand != "run":
        print(f"Unknown command: 'suite {pargs.subcommand}'.")
        parser.print_help()
        return 1

    # CLI > config > default
    workers = pargs.workers or int(config_manager.get_nested("suite.workers", 1))
    show_progress = not pargs.no_progress and bool(config_manager.get_nested("suite.show_progress", True))
    trim_text = pargs.trim_text or bool(config_manager.get_nested("loader.trim_text", False))

    controller = SuiteController(default_workers=workers)

    try:
        manifest, data_dir = controller.load_manifest(PathUtils.resolve_user_path(pargs.manifest))
        report = controller.run(
            manifest,
            data_dir=data_dir,
            workers=workers,
            show_progress=show_progress,
            trim_text=trim_text,
        )
    except (OSError, ValueError) as e:
        logger.error("Suite run failed: %s", e, exc_info=True)
        print(f"❌ Error: {e}")
        return 1

    print()
    for result in report.results:
        print(result.summary_line())
    print()

    if pargs.export:
        export_path = PathUtils.resolve_user_path(pargs.export)
        try:
            report.to_dataframe().to_csv(export_path, index=False)
        except OSError as e:
            logger.error("Export failed: %s", e, exc_info=True)
            print(f"❌ Error: could not write {export_path}: {e}")
            return 1
        print(f"Results written to {export_path}")

    icon = "✅" if report.all_passed else "❌"
    print(
        f"{icon} {report.passed}/{report.total} cases passed "
        f"({report.failed} failed, {report.errors} errors) in {report.duration_s}s."
    )
    return 0 if report.all_passed else 1
