"""Shared fixtures — an in-memory samples_pokemon collection.

Invariants:
    - Every test gets a fresh mongomock client (no server needed)
    - The seeded records cover first-stage, middle-stage and terminal forms,
      an avg_spawns value of exactly 4, a "14:00" spawn time, and a
      reference to a pokemon that is not in the collection
    - Every record carries name, num, spawn_time and avg_spawns
"""

import mongomock
import pytest


SAMPLE_POKEMON = [
    {
        "num": "001", "name": "Bulbasaur", "spawn_time": "20:00", "avg_spawns": 69,
        "next_evolution": [{"num": "002", "name": "Ivysaur"}, {"num": "003", "name": "Venusaur"}],
    },
    {
        "num": "002", "name": "Ivysaur", "spawn_time": "04:00", "avg_spawns": 4.2,
        "prev_evolution": [{"num": "001", "name": "Bulbasaur"}],
        "next_evolution": [{"num": "003", "name": "Venusaur"}],
    },
    {
        "num": "003", "name": "Venusaur", "spawn_time": "11:30", "avg_spawns": 1.7,
        "prev_evolution": [{"num": "001", "name": "Bulbasaur"}, {"num": "002", "name": "Ivysaur"}],
    },
    {
        "num": "007", "name": "Squirtle", "spawn_time": "04:25", "avg_spawns": 58,
        "next_evolution": [{"num": "008", "name": "Wartortle"}],
    },
    {
        "num": "008", "name": "Wartortle", "spawn_time": "07:02", "avg_spawns": 4,
        "prev_evolution": [{"num": "007", "name": "Squirtle"}],
        "next_evolution": [{"num": "009", "name": "Blastoise"}],
    },
    {
        "num": "009", "name": "Blastoise", "spawn_time": "00:06", "avg_spawns": 0.67,
        "prev_evolution": [{"num": "007", "name": "Squirtle"}, {"num": "008", "name": "Wartortle"}],
    },
    {
        "num": "016", "name": "Pidgey", "spawn_time": "01:34", "avg_spawns": 1583,
        "next_evolution": [{"num": "017", "name": "Pidgeotto"}, {"num": "018", "name": "Pidgeot"}],
    },
    {
        "num": "017", "name": "Pidgeotto", "spawn_time": "04:30", "avg_spawns": 5,
        "prev_evolution": [{"num": "016", "name": "Pidgey"}],
        "next_evolution": [{"num": "018", "name": "Pidgeot"}],
    },
    {
        "num": "018", "name": "Pidgeot", "spawn_time": "14:00", "avg_spawns": 6.3,
        "prev_evolution": [{"num": "016", "name": "Pidgey"}, {"num": "017", "name": "Pidgeotto"}],
    },
    {
        "num": "019", "name": "Rattata", "spawn_time": "01:55", "avg_spawns": 2372,
        "next_evolution": [{"num": "020", "name": "Raticate"}],
    },
    {
        "num": "020", "name": "Raticate", "spawn_time": "14:00", "avg_spawns": 4,
        "prev_evolution": [{"num": "019", "name": "Rattata"}],
    },
    {
        "num": "132", "name": "Ditto", "spawn_time": "20:00", "avg_spawns": 0.3,
    },
    {
        "num": "137", "name": "Porygon", "spawn_time": "02:49", "avg_spawns": 1.2,
        "next_evolution": [{"num": "233", "name": "Porygon2"}],
    },
]


@pytest.fixture
def mongo_client():
    client = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture
def db(mongo_client):
    return mongo_client["pokedex"]


@pytest.fixture
def make_collection(db):
    """Build a samples_pokemon collection from the given records."""
    def _make(records):
        collection = db["samples_pokemon"]
        collection.delete_many({})
        if records:
            collection.insert_many([dict(record) for record in records])
        return collection
    return _make


@pytest.fixture
def pokemon(make_collection):
    return make_collection(SAMPLE_POKEMON)
