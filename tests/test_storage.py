import json

from services.storage import GameStore


def test_missing_file_starts_empty(tmp_path):
    store = GameStore(str(tmp_path / "characters.json"))
    assert len(store) == 0
    assert store.backup_path == str(tmp_path / "characters_backup.json")


def test_put_writes_through_and_reloads(tmp_path):
    path = str(tmp_path / "characters.json")
    store = GameStore(path)
    store.put(42, {"name": "Robin", "level": 3})

    reloaded = GameStore(path)
    assert reloaded.exists("42")
    assert reloaded.get(42)["name"] == "Robin"


def test_delete(tmp_path):
    store = GameStore(str(tmp_path / "characters.json"))
    store.put("1", {"name": "Brook"})
    assert store.delete("1") is True
    assert store.delete("1") is False
    assert store.get("1") is None


def test_all_returns_copies(tmp_path):
    store = GameStore(str(tmp_path / "characters.json"))
    store.put("1", {"name": "Franky", "coins": 10})

    for _, character in store.all():
        character["coins"] = 0
    assert store.get("1")["coins"] == 10


def test_corrupt_file_falls_back_to_backup(tmp_path):
    (tmp_path / "characters.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "characters_backup.json").write_text(
        json.dumps({"characters": {"7": {"name": "Chopper"}}}), encoding="utf-8"
    )

    store = GameStore(str(tmp_path / "characters.json"))
    assert store.get("7")["name"] == "Chopper"


def test_corrupt_file_without_backup_starts_empty(tmp_path):
    (tmp_path / "characters.json").write_text("", encoding="utf-8")
    store = GameStore(str(tmp_path / "characters.json"))
    assert len(store) == 0


def test_failed_save_writes_backup(tmp_path):
    store = GameStore(str(tmp_path / "characters.json"))
    store.data["characters"]["9"] = {"name": "Jinbe"}
    # A directory can't be opened for writing
    store.path = str(tmp_path)

    assert store.save() is False
    backup = json.loads((tmp_path / "characters_backup.json").read_text(encoding="utf-8"))
    assert backup["characters"]["9"]["name"] == "Jinbe"
