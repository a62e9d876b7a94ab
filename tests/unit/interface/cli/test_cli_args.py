from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Subcommand and positional mapping.
2. CSV string parsing logic.
3. Override merging semantics.
"""

import pytest

from notefolders.interface.cli.app import _merge_config
from notefolders.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_add_subcommand_mapping():
    args = parse_args(["--json", "add", "-d", "/notes", "Reading", "a.md", "b.md"])

    assert args.command == "add"
    assert args.directory == "/notes"
    assert args.name == "Reading"
    assert args.files == ["a.md", "b.md"]
    assert args.json_output is True


def test_remove_without_files_defaults_to_empty_list():
    args = parse_args(["remove", "Reading"])
    assert args.files == []
    assert args.directory is None


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_csv_extension_parsing():
    overrides = args_to_overrides(parse_args(["--ext", ".md, txt,,", "list"]))
    assert overrides["extensions"] == [".md", "txt"]


def test_unset_options_are_none():
    overrides = args_to_overrides(parse_args(["list"]))
    assert overrides == {"extensions": None, "last_directory": None}


def test_merge_config_ignores_none_and_unknown_keys():
    base = {"extensions": [".md"], "exclude_patterns": [], "last_directory": "/old"}
    merged = _merge_config(base, {"extensions": None, "last_directory": "/new", "bogus": 1})

    assert merged == {"extensions": [".md"], "exclude_patterns": [], "last_directory": "/new"}
    assert base["last_directory"] == "/old"
