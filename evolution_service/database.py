"""
🔌 MongoDB Connection
══════════════════════

Opens the connection to the database that holds the samples_pokemon
collection. This service only ever READS from it.

WHY A CONTEXT MANAGER INSTEAD OF A GLOBAL CONNECTION?
  The connection is handed to whoever needs it (the query functions take a
  collection argument) and closed when the `with` block ends — whether the
  block finished normally, raised an error, or was interrupted with Ctrl+C.

      with open_database(uri, "pokedex") as db:
          pokemon = db["samples_pokemon"]
          ...
      # ← client is closed here, no matter what happened inside

WHY THE PING?
  MongoClient() is lazy: creating it never talks to the server. The first
  real round-trip would only happen at the first query. We send a cheap
  "ping" command right away so a wrong URI or a dead server is reported
  as a connection error, before any query is attempted.
"""

from contextlib import contextmanager

from pymongo import MongoClient
from pymongo.errors import PyMongoError


class DatabaseConnectionError(Exception):
    """The server could not be reached. Carries the URI we tried."""

    def __init__(self, mongo_uri, cause):
        super().__init__(f"Error connecting to {mongo_uri}: {cause}")
        self.mongo_uri = mongo_uri
        self.cause = cause


def connect(mongo_uri, timeout_ms=10000, client_factory=MongoClient):
    """
    Create a client and verify the server answers.

    Returns the connected MongoClient. On failure the half-open client is
    closed and DatabaseConnectionError is raised.
    """
    client = client_factory(
        mongo_uri,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
    )
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise DatabaseConnectionError(mongo_uri, e) from e
    except BaseException:
        client.close()
        raise
    return client


@contextmanager
def open_database(mongo_uri, db_name, timeout_ms=10000, client_factory=MongoClient):
    """
    Yields the database handle for `db_name` and closes the client on exit.
    """
    client = connect(mongo_uri, timeout_ms=timeout_ms, client_factory=client_factory)
    print(f"✅ Connected to MongoDB database: {db_name}")
    try:
        yield client[db_name]
    finally:
        client.close()
        print("🔌 MongoDB connection closed")
