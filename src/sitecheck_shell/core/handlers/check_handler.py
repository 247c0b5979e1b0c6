# src/sitecheck_shell/core/handlers/check_handler.py
import argparse
import logging
from pathlib import Path
from typing import List

from sitecheck.a11y.extractor import A11yOptions, DEFAULT_LOW_INFORMATION_PHRASES
from sitecheck.controllers.check_controller import CheckController
from sitecheck.controllers.report_controller import ReportController
from sitecheck_shell.core.managers.config_manager import config_manager
from sitecheck_shell.core.utils.configure_logging import configure_logger
from sitecheck_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

SUBCOMMANDS = ["notes", "a11y", "all"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitecheck",
        description="Static checks for the portfolio site: notes consistency and accessibility."
    )
    subparsers = parser.add_subparsers(dest="subcommand", help="Checks")

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", type=str, default=None, help="Site root directory (default: current directory).")
    common.add_argument("--export", type=str, default=None, help="Also write findings to .csv, .json or .xlsx.")
    common.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")

    notes_opts = argparse.ArgumentParser(add_help=False)
    notes_opts.add_argument("--notes-dir", type=str, default=None, help="Notes directory, relative to the root.")
    notes_opts.add_argument("--index", type=str, default=None, help="File name of the notes index page.")
    notes_opts.add_argument("--progress", action="store_true", help="Show a progress bar while reading notes.")

    a11y_opts = argparse.ArgumentParser(add_help=False)
    a11y_opts.add_argument("--document", type=str, default=None, help="Page to lint, relative to the root.")

    subparsers.add_parser("notes", parents=[common, notes_opts], help="Check notes index and note pages")
    subparsers.add_parser("a11y", parents=[common, a11y_opts], help="Lint a page for common WCAG issues")
    subparsers.add_parser("all", parents=[common, notes_opts, a11y_opts], help="Run both checks")

    return parser


def _apply_overrides(parsed_args: argparse.Namespace) -> None:
    """Pushes command line options into the in-memory configuration."""
    config_manager.apply_overrides({
        "debug.level": getattr(parsed_args, "log_level", None),
        "notes.directory": getattr(parsed_args, "notes_dir", None),
        "notes.index": getattr(parsed_args, "index", None),
        "a11y.document": getattr(parsed_args, "document", None),
        "notes.show_progress": getattr(parsed_args, "progress", None),
    })


def handle_check(args: List[str]) -> int:
    """
    Handler for the check commands.

    Returns:
        0 when no hard failures were found, 1 when at least one was, 2 for usage errors.
    """
    args = list(args)
    parser = build_parser()

    # Bare invocation or options only: run everything
    if not args or (args[0] not in SUBCOMMANDS and args[0] not in ("-h", "--help")):
        args.insert(0, "all")

    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return 0 if e.code == 0 else 2

    _apply_overrides(parsed_args)
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        module_levels=config_manager.get_nested("debug.modules", {})
    )

    site_root = PathUtils.get_site_root(parsed_args.root)
    logger.info("Site root: %s", site_root)

    controller = CheckController()
    reporter = ReportController()
    reports = []

    if parsed_args.subcommand in ("notes", "all"):
        notes_dir = PathUtils.resolve_in_site(site_root, config_manager.get_nested("notes.directory", "notes"))
        reports.append(controller.run_notes(
            notes_dir,
            index_name=config_manager.get_nested("notes.index", "index.html"),
            show_progress=bool(config_manager.get_nested("notes.show_progress", False))
        ))

    if parsed_args.subcommand in ("a11y", "all"):
        document = PathUtils.resolve_in_site(site_root, config_manager.get_nested("a11y.document", "index.html"))
        options = A11yOptions(
            min_link_text_length=config_manager.get_nested("a11y.min_link_text_length", 2),
            low_information_phrases=config_manager.get_nested(
                "a11y.low_information_phrases", list(DEFAULT_LOW_INFORMATION_PHRASES)
            )
        )
        reports.append(controller.run_a11y(document, options))

    for i, report in enumerate(reports):
        if i:
            print()
        reporter.print_report(report)

    if parsed_args.export:
        export_path = Path(parsed_args.export)
        if reporter.export(reports, export_path):
            print(f"\n✅ Findings exported to {export_path}")
        else:
            print(f"\n❌ Could not export findings to {export_path}")

    return reporter.combined_exit_code(reports)
