from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of the saved
configuration with command-line overrides, opening the notes directory,
running the requested overlay operation and rendering its result.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from notefolders.core.analysis.tree_renderer import render_virtual_dir
from notefolders.core.services.directory_index import DirectoryIndex
from notefolders.domain.config import (
    get_default_app_state,
    get_default_config,
    load_app_state,
    load_config,
    save_last_directory,
)
from notefolders.domain.errors import DirectoryNotFoundError
from notefolders.domain.virtual_dir_models import VirtualDirectoryView
from notefolders.infra.logging import (
    config_from_settings,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from notefolders.interface.cli import args as cli_args
from notefolders.utils.hashing import string_hash

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional argument list. Defaults to sys.argv.

    Returns:
        int: Exit code (0 success, 1 failure, 2 missing directory,
        130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Resolve base configuration (defaults vs persisted state)
    if args.use_defaults:
        state = get_default_app_state()
        base_conf = get_default_config()
    else:
        state = load_app_state()
        base_conf = load_config()

    # 2. Logging bootstrap
    configure_logging(config_from_settings(state.get("app_settings", {}), debug=args.debug))
    try:
        return _run(args, base_conf)
    finally:
        shutdown_logging()


def _run(args: Any, base_conf: Dict[str, Any]) -> int:
    # 3. Merge command-line overrides (never written back)
    conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    directory = conf.get("last_directory") or os.getcwd()

    # 4. Open the notes directory
    try:
        index = DirectoryIndex(
            directory,
            extensions=conf.get("extensions"),
            exclude_patterns=conf.get("exclude_patterns"),
        )
    except DirectoryNotFoundError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        logger.error(f"Unreadable virtual folder file in {directory}: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # 5. Dispatch
    try:
        code = _COMMANDS[args.command](index, args)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except OSError as e:
        logger.critical(f"Command '{args.command}' failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not args.use_defaults:
        save_last_directory(index.get_path())

    return code

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys into the base configuration.

    Args:
        base: The primary configuration dictionary.
        overrides: New values; None means 'keep base'.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k in ("extensions", "exclude_patterns", "last_directory"):
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_list(index: DirectoryIndex, args: Any) -> int:
    views = index.virtual_dirs.views
    if args.json_output:
        print(json.dumps([v.to_dict() for v in views], ensure_ascii=False, indent=2))
        return 0

    if not views:
        print(f"No virtual folders in {index.get_path()}")
        return 0

    for v in views:
        print(f"{v.name}  [{v.hash}]  {len(v.children)} file(s)")
    return 0


def _cmd_show(index: DirectoryIndex, args: Any) -> int:
    view = _resolve_view(index, args.name)
    if view is None:
        print(f"ERROR: No virtual folder named '{args.name}'", file=sys.stderr)
        return 1

    _print_view(view, args.json_output)
    return 0


def _cmd_add(index: DirectoryIndex, args: Any) -> int:
    refs = [os.path.abspath(f) for f in args.files]
    for ref in refs:
        if not index.is_scope(ref):
            print(f"Skipped (outside {index.get_path()}): {ref}", file=sys.stderr)

    index.virtual_dirs.add(args.name, refs)

    view = _resolve_view(index, args.name)
    if view is not None:
        _print_view(view, args.json_output)
    return 0


def _cmd_remove(index: DirectoryIndex, args: Any) -> int:
    manager = index.virtual_dirs
    if args.name not in manager:
        print(f"ERROR: No virtual folder named '{args.name}'", file=sys.stderr)
        return 1

    manager.remove(args.name, [os.path.abspath(f) for f in args.files])

    view = _resolve_view(index, args.name)
    if view is None:
        print(f"Removed virtual folder '{args.name}'")
    else:
        _print_view(view, args.json_output)
    return 0


_COMMANDS = {
    "list": _cmd_list,
    "show": _cmd_show,
    "add": _cmd_add,
    "remove": _cmd_remove,
}

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _resolve_view(index: DirectoryIndex, name: str) -> Optional[VirtualDirectoryView]:
    """Map a case-insensitive name to the stored name, then look it up by hash."""
    for stored in index.virtual_dirs.names:
        if stored.lower() == name.lower():
            return index.find_dir({"hash": string_hash(stored)})
    return None


def _print_view(view: VirtualDirectoryView, as_json: bool) -> None:
    if as_json:
        print(json.dumps(view.to_dict(), ensure_ascii=False, indent=2))
        return
    print("\n".join(render_virtual_dir(view)))


if __name__ == "__main__":
    sys.exit(main())
