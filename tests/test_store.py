import json

import pytest

from app.store import BlueprintStore, new_blueprint_id


def test_save_then_load_returns_same_document(store):
    blueprint_id = new_blueprint_id()
    document = {"version": "v1", "warnings": ["a"]}
    store.save(blueprint_id, json.dumps(document, indent=2))

    assert store.load(blueprint_id) == document
    assert store.last_id() == blueprint_id


def test_entries_are_named_by_key(store):
    blueprint_id = new_blueprint_id()
    store.save(blueprint_id, "{}")
    assert (store.root / f"micro_si_blueprint_{blueprint_id}.json").exists()


def test_missing_entry_is_not_found(store):
    assert store.load(new_blueprint_id()) is None
    assert store.last_id() is None


def test_corrupt_entry_is_not_found(store):
    blueprint_id = new_blueprint_id()
    store.save(blueprint_id, "{}")
    (store.root / f"micro_si_blueprint_{blueprint_id}.json").write_text("{not json", encoding="utf-8")
    assert store.load(blueprint_id) is None


def test_non_object_entry_is_not_found(store):
    blueprint_id = new_blueprint_id()
    store.save(blueprint_id, "[1, 2]")
    assert store.load(blueprint_id) is None


@pytest.mark.parametrize("bad_id", ["../etc/passwd", "", "not-a-uuid"])
def test_malformed_id_is_not_found(store, bad_id):
    assert store.load(bad_id) is None


def test_save_rejects_malformed_id(tmp_path):
    with pytest.raises(ValueError):
        BlueprintStore(tmp_path).save("../escape", "{}")


def test_last_id_tracks_most_recent_save(store):
    first, second = new_blueprint_id(), new_blueprint_id()
    store.save(first, "{}")
    store.save(second, "{}")
    assert store.last_id() == second
    assert store.load(first) == {}


def test_undecodable_entry_is_not_found(store):
    blueprint_id = new_blueprint_id()
    store.save(blueprint_id, "{}")
    (store.root / f"micro_si_blueprint_{blueprint_id}.json").write_bytes(b"\xff\xfe{garbage")
    assert store.load(blueprint_id) is None


def test_directory_at_entry_path_is_not_found(store):
    blueprint_id = new_blueprint_id()
    (store.root / f"micro_si_blueprint_{blueprint_id}.json").mkdir(parents=True)
    assert store.load(blueprint_id) is None


def test_undecodable_last_id_is_none(store):
    store.save(new_blueprint_id(), "{}")
    (store.root / "micro_si_last_blueprint_id.json").write_bytes(b"\xff\xfe")
    assert store.last_id() is None
