from __future__ import annotations

"""
End-to-End tests for the CLI.

Drives notefolders.interface.cli.app.main() against a real notes folder
and checks both the console output and the sidecar left on disk.
"""

import json
import logging
import os
from pathlib import Path

from notefolders.infra.logging import _CONFIGURED_FLAG_ATTR, _HANDLER_TAG_ATTR
from notefolders.interface.cli.app import main
from notefolders.utils.hashing import string_hash

SIDECAR = ".ztr-virtual-dir"


def _sidecar(root: Path) -> list:
    return json.loads((root / SIDECAR).read_text(encoding="utf-8"))


def test_add_show_list_remove_cycle(notes_root: Path, capsys) -> None:
    d = str(notes_root)

    rc = main(["add", "-d", d, "Reading", str(notes_root / "alpha.md"), str(notes_root / "projects" / "gamma.md")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Reading/" in out
    assert "gamma.md" in out
    assert _sidecar(notes_root) == [{"name": "Reading", "files": ["alpha.md", os.path.join("projects", "gamma.md")]}]

    rc = main(["list", "-d", d])
    assert rc == 0
    out = capsys.readouterr().out
    assert f"Reading  [{string_hash('Reading')}]  2 file(s)" in out

    rc = main(["show", "-d", d, "reading"])
    assert rc == 0
    assert "alpha.md" in capsys.readouterr().out

    rc = main(["remove", "-d", d, "READING", str(notes_root / "alpha.md")])
    assert rc == 0
    assert _sidecar(notes_root) == [{"name": "Reading", "files": [os.path.join("projects", "gamma.md")]}]

    rc = main(["remove", "-d", d, "Reading"])
    assert rc == 0
    assert "Removed virtual folder 'Reading'" in capsys.readouterr().out
    assert not (notes_root / SIDECAR).exists()


def test_add_reports_out_of_scope_files(notes_root: Path, outside_file: Path, capsys) -> None:
    rc = main(["add", "-d", str(notes_root), "X", str(outside_file)])

    assert rc == 0
    assert "Skipped" in capsys.readouterr().err
    assert _sidecar(notes_root) == [{"name": "X", "files": []}]


def test_json_output(notes_root: Path, capsys) -> None:
    main(["add", "-d", str(notes_root), "Inbox", str(notes_root / "beta.md")])
    capsys.readouterr()

    rc = main(["--json", "list", "-d", str(notes_root)])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0]["name"] == "Inbox"
    assert data[0]["type"] == "virtualdir"
    assert data[0]["children"][0]["name"] == "beta.md"


def test_unknown_virtual_folder(notes_root: Path, capsys) -> None:
    assert main(["show", "-d", str(notes_root), "Nope"]) == 1
    assert main(["remove", "-d", str(notes_root), "Nope"]) == 1
    assert "No virtual folder named 'Nope'" in capsys.readouterr().err


def test_missing_directory_exit_code(tmp_path: Path, capsys) -> None:
    assert main(["list", "-d", str(tmp_path / "missing")]) == 2
    assert "ERROR" in capsys.readouterr().err


def test_broken_sidecar_exit_code(notes_root: Path, capsys) -> None:
    (notes_root / SIDECAR).write_text("{{", encoding="utf-8")
    assert main(["list", "-d", str(notes_root)]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_last_directory_is_remembered(notes_root: Path, isolated_user_dir: Path, capsys) -> None:
    main(["add", "-d", str(notes_root), "Inbox"])
    saved = json.loads((isolated_user_dir / "config.json").read_text(encoding="utf-8"))
    assert saved["last_session"]["last_directory"] == str(notes_root)
    capsys.readouterr()

    assert main(["list"]) == 0
    assert "Inbox" in capsys.readouterr().out


def test_use_defaults_does_not_save(notes_root: Path, isolated_user_dir: Path) -> None:
    assert main(["--use-defaults", "list", "-d", str(notes_root)]) == 0
    assert not (isolated_user_dir / "config.json").exists()


def test_extension_override(notes_root: Path, capsys) -> None:
    rc = main(["--ext", "png", "add", "-d", str(notes_root), "Pics", str(notes_root / "image.png")])
    assert rc == 0
    assert "image.png" in capsys.readouterr().out


def test_extension_override_is_not_persisted(notes_root: Path, isolated_user_dir: Path, capsys) -> None:
    d = str(notes_root)
    main(["add", "-d", d, "Inbox", str(notes_root / "alpha.md")])

    assert main(["--ext", "png", "list", "-d", d]) == 0
    saved = json.loads((isolated_user_dir / "config.json").read_text(encoding="utf-8"))
    assert saved["last_session"]["extensions"] == [".md", ".markdown", ".txt"]
    capsys.readouterr()

    assert main(["list", "-d", d]) == 0
    assert f"Inbox  [{string_hash('Inbox')}]  1 file(s)" in capsys.readouterr().out


def test_saved_index_settings_survive_runs(notes_root: Path, isolated_user_dir: Path, capsys) -> None:
    (isolated_user_dir / "config.json").write_text(json.dumps({
        "last_session": {"extensions": [".png"]},
    }), encoding="utf-8")

    main(["add", "-d", str(notes_root), "Pics", str(notes_root / "image.png")])
    assert "image.png" in capsys.readouterr().out

    saved = json.loads((isolated_user_dir / "config.json").read_text(encoding="utf-8"))
    assert saved["last_session"]["extensions"] == [".png"]
    assert saved["last_session"]["last_directory"] == str(notes_root)


def test_out_of_scope_file_reported_once(notes_root: Path, outside_file: Path, capsys) -> None:
    main(["add", "-d", str(notes_root), "X", str(outside_file)])

    assert capsys.readouterr().err.count(str(outside_file)) == 1


def test_main_detaches_its_log_handlers(notes_root: Path) -> None:
    main(["--debug", "list", "-d", str(notes_root)])

    root = logging.getLogger()
    assert not [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]
    assert not hasattr(root, _CONFIGURED_FLAG_ATTR)
