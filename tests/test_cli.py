from __future__ import annotations

from pathlib import Path

import pytest

from udbuildings.cli.buildings_cli import display_fields, main, save_note
from udbuildings.store import BuildingRecord, ConstraintViolation, NotFound


@pytest.fixture
def cli_env(monkeypatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("UDB_DB_PATH", str(tmp_path / "data" / "cli.db"))
    monkeypatch.setenv("UDB_SEED_PATH", str(tmp_path / "data" / "seed"))
    monkeypatch.setenv("UDB_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("UDB_SCHEMA_VERSION", raising=False)
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "seed").write_text("A1:Tower:10.0:20.0\n", encoding="utf-8")
    return tmp_path


def test_display_fields_labels() -> None:
    record = BuildingRecord(3, "A1", "Tower", "10.0", "20.0")
    assert display_fields(record) == [
        "Code: A1",
        "Name: Tower",
        "Latitude: 10.0",
        "Longitude: 20.0",
    ]


def test_save_note_creates_then_updates(store) -> None:
    rid = save_note(store, None, "A1", "Tower", "10.0", "20.0")
    assert save_note(store, rid, "A1", "Tower West", "10.0", "20.0") == rid
    assert store.fetch_note(rid).name == "Tower West"


def test_save_note_unknown_id_raises(store) -> None:
    with pytest.raises(NotFound):
        save_note(store, 12, "A1", "Tower", "10.0", "20.0")


def test_save_note_propagates_constraint_violation(store) -> None:
    save_note(store, None, "A1", "Tower", "10.0", "20.0")
    with pytest.raises(ConstraintViolation):
        save_note(store, None, "A1", "Hall", "11.0", "21.0")


def test_list_shows_seeded_building(cli_env, capsys) -> None:
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Code: A1" in out
    assert "1 building(s)" in out


def test_add_edit_show_delete(cli_env, capsys) -> None:
    assert main(["add", "A2", "Hall", "11.0", "21.0"]) == 0
    assert "Saved building 2" in capsys.readouterr().out

    assert main(["edit", "2", "A2", "Great Hall", "11.0", "21.0"]) == 0
    capsys.readouterr()

    assert main(["show", "2"]) == 0
    assert "Name: Great Hall" in capsys.readouterr().out

    assert main(["delete", "2"]) == 0
    assert main(["delete", "2"]) == 1
    assert "No building with id 2" in capsys.readouterr().err


def test_store_errors_exit_nonzero(cli_env, capsys) -> None:
    assert main(["add", "A1", "Other", "1.0", "2.0"]) == 1
    assert "Error:" in capsys.readouterr().err

    assert main(["show", "99"]) == 1
    assert "No building with id 99" in capsys.readouterr().err


def test_db_flag_overrides_env(cli_env, capsys) -> None:
    other = cli_env / "data" / "other.db"
    assert main(["--db", str(other), "--seed", str(cli_env / "none"), "list"]) == 0
    assert "0 building(s)" in capsys.readouterr().out
    assert other.exists()
