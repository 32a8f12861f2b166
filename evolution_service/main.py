"""
🚀 Evolution Queries — Entry Point
═══════════════════════════════════

Run with:  python -m evolution_service.main
      or:  evolution-queries            (console script from pyproject.toml)

WHAT HAPPENS:
  1. Load settings from the environment / .env file
  2. Connect to MongoDB (and ping it, so a bad URI fails right here)
  3. QUESTION 1 — pokemon with 1+ evolutions and their evolutions' details
  4. QUESTION 2 — first-stage pokemon passing the configured variant's test
  5. Close the connection and exit

Everything runs ONE step at a time: the second query only starts after the
first one has been printed.

EXIT CODES:
  0 → both queries ran (or Ctrl+C / SIGTERM asked us to stop)
  1 → bad configuration, the database could not be reached, or a query failed
"""

import logging
import signal
import sys

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from evolution_service.config import load_settings
from evolution_service.database import DatabaseConnectionError, open_database
from evolution_service.services.evolution_queries import (
    describe_variant,
    find_first_stage_pokemon,
    find_pokemon_with_evolutions,
)
from evolution_service.services.report_printer import print_results

# pymongo logs every server heartbeat at DEBUG; we only want our own output
logging.getLogger("pymongo").setLevel(logging.WARNING)


def _variant_argument(settings):
    if settings["first_stage_variant"] == "avg_spawns":
        return settings["avg_spawns_threshold"]
    if settings["first_stage_variant"] == "spawn_time":
        return settings["spawn_time_prefix"]
    return None


def run_queries(db, settings):
    """
    Run both questions against `db` and print each result set.
    Returns the two result lists (handy for tests and scripts).
    """
    collection = db[settings["collection"]]
    output_format = settings["output_format"]
    variant = settings["first_stage_variant"]

    print(f"\n📥 Querying collection: {settings['collection']}")
    evolutions = find_pokemon_with_evolutions(collection)
    print_results("Pokemon with 1 or more evolutions", evolutions, output_format)

    first_stage = find_first_stage_pokemon(collection, variant, _variant_argument(settings))
    print_results(
        f"First-stage pokemon ({variant}): {describe_variant(variant)}",
        first_stage,
        output_format,
    )
    return evolutions, first_stage


def _raise_system_exit(signum, frame):
    # SIGTERM → SystemExit, so the `with open_database(...)` block still closes the client
    raise SystemExit(0)


def main():
    load_dotenv()
    signal.signal(signal.SIGTERM, _raise_system_exit)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    try:
        with open_database(
            settings["mongo_uri"],
            settings["db_name"],
            timeout_ms=settings["timeout_ms"],
        ) as db:
            run_queries(db, settings)
    except DatabaseConnectionError as e:
        print(f"❌ Error connecting to {e.mongo_uri}: {e.cause}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    except PyMongoError as e:
        print(f"❌ Query failed: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n👋 MongoDB disconnected on app termination")
        sys.exit(0)


if __name__ == "__main__":
    main()
