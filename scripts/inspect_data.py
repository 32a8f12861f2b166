"""Quick script to inspect the samples_pokemon collection structure (read-only)."""
import os, sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from dotenv import load_dotenv
load_dotenv()

from pymongo import ASCENDING

from evolution_service.config import load_settings
from evolution_service.database import open_database

settings = load_settings()
print("Connecting to MongoDB...")

with open_database(settings["mongo_uri"], settings["db_name"], timeout_ms=settings["timeout_ms"]) as db:
    pokemon = db[settings["collection"]]
    print(f"Total pokemon: {pokemon.count_documents({})}")

    sample = pokemon.find_one(sort=[("name", ASCENDING)])
    if sample is None:
        print("Collection is empty.")
    else:
        print(f"Sample keys: {list(sample.keys())}")
        print(f"Sample: name={sample.get('name')}, num={sample.get('num')}, spawn_time={sample.get('spawn_time')}")

        first_stage = pokemon.count_documents(
            {"next_evolution": {"$exists": True}, "prev_evolution": {"$exists": False}}
        )
        middle = pokemon.count_documents(
            {"next_evolution": {"$exists": True}, "prev_evolution": {"$exists": True}}
        )
        terminal = pokemon.count_documents({"next_evolution": {"$exists": False}})
        print(f"First-stage forms: {first_stage}")
        print(f"Middle-stage forms: {middle}")
        print(f"Terminal forms: {terminal}")
        print(f"Records with avg_spawns: {pokemon.count_documents({'avg_spawns': {'$exists': True}})}")
