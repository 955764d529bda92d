import pytest
from combat_engine.resources.database import Database

ITEM_SCHEMA = {
    "type": "object",
    "required": ["id", "price"],
    "properties": {
        "id": {"type": "string"},
        "price": {"type": "integer"}
    }
}

@pytest.fixture
def db():
    database = Database()
    database.register_schema("items", ITEM_SCHEMA)
    return database

def test_load_entries(db):
    loaded = db.load_entries("items", [{"id": "sword", "price": 100}])

    assert loaded == 1
    assert db.get("items", "sword")["price"] == 100

def test_validation_error(db, caplog):
    loaded = db.load_entries("items", [
        {"id": "broken"},
        {"id": "potion", "price": 5},
    ])

    assert loaded == 1
    assert db.get("items", "broken") is None # Skipped due to validation error
    assert db.get("items", "potion") is not None
    assert "Validation error" in caplog.text

def test_missing_schema():
    db = Database()

    # Without a schema nothing is loaded
    assert db.load_entries("items", [{"id": "sword", "price": 100}]) == 0
    assert db.get("items", "sword") is None

def test_entries_keep_load_order(db):
    db.load_entries("items", [
        {"id": "b", "price": 1},
        {"id": "a", "price": 2},
    ])

    assert [e["id"] for e in db.entries("items")] == ["b", "a"]
    assert db.categories() == ["items"]

def test_duplicate_id_replaces(db):
    db.load_entries("items", [{"id": "sword", "price": 100}])
    db.load_entries("items", [{"id": "sword", "price": 150}])

    assert db.get("items", "sword")["price"] == 150
    assert len(db.entries("items")) == 1

def test_entry_without_id_is_skipped():
    db = Database()
    db.register_schema("misc", {"type": "object"})

    assert db.load_entries("misc", [{"name": "nameless"}]) == 0
