from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global flags plus one subcommand per
overlay operation) and translates argparse namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the NoteFolders CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="notefolders",
        description="Group existing notes into virtual folders without moving them.",
    )

    # --- Global options ---
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated file extensions to index (e.g. .md,.txt).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration for this run.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Subcommands ---
    p_list = sub.add_parser("list", help="List the virtual folders of a directory.")
    _add_directory_arg(p_list)

    p_show = sub.add_parser("show", help="Show the notes grouped in a virtual folder.")
    _add_directory_arg(p_show)
    p_show.add_argument("name", help="Virtual folder name (case-insensitive).")

    p_add = sub.add_parser("add", help="Create a virtual folder and/or add notes to it.")
    _add_directory_arg(p_add)
    p_add.add_argument("name", help="Virtual folder name (case-insensitive).")
    p_add.add_argument("files", nargs="*", default=[], help="Notes to add.")

    p_rm = sub.add_parser(
        "remove",
        help="Remove notes from a virtual folder, or the whole folder if no notes are given.",
    )
    _add_directory_arg(p_rm)
    p_rm.add_argument("name", help="Virtual folder name (case-insensitive).")
    p_rm.add_argument("files", nargs="*", default=[], help="Notes to remove.")

    return p


def _add_directory_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d", "--dir",
        dest="directory",
        default=None,
        help="Notes directory. Defaults to the last one used, then the current directory.",
    )

# -----------------------------------------------------------------------------
# OVERRIDE MAPPING
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated string, dropping blanks. None stays None."""
    if value is None:
        return None
    return [x.strip() for x in value.split(",") if x.strip()]


def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Map parsed arguments to configuration keys.

    Unset options map to None so the merge step keeps the base value.

    Args:
        args: Parsed namespace.

    Returns:
        Dict[str, Any]: Configuration overrides.
    """
    return {
        "extensions": _split_csv(args.extensions),
        "last_directory": getattr(args, "directory", None),
    }
