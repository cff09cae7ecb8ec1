"""Pytest configuration ensuring the `src` directory is on sys.path.

Allows `import mdm_init...` without installing the package, and provides an
in-memory stand-in for the handful of pymongo calls the bootstrap makes.
"""
import sys
import os

import pytest
from pymongo.errors import BulkWriteError, CollectionInvalid, ServerSelectionTimeoutError

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)


class FakeInsertManyResult:
    def __init__(self, inserted_ids):
        self.inserted_ids = inserted_ids


class FakeCollection:
    def __init__(self, database, name):
        self.database = database
        self.name = name
        self.documents = []
        self.indexes = []

    def create_index(self, keys, **kwargs):
        self.database._materialize(self.name)
        self.indexes.append((list(keys), kwargs))
        self.database.server.writes += 1
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    def insert_many(self, documents):
        documents = list(documents)
        self.database._materialize(self.name)
        server = self.database.server
        server.writes += 1
        if self.name in server.failing_inserts:
            raise BulkWriteError({
                "writeErrors": [{"index": 0, "code": 11000, "errmsg": "E11000 duplicate key error"}],
                "writeConcernErrors": [],
                "nInserted": 0,
            })
        ids = []
        for doc in documents:
            self.documents.append(doc)
            ids.append(len(self.documents))
        return FakeInsertManyResult(ids)


class FakeDatabase:
    def __init__(self, server, name):
        self.server = server
        self.name = name
        self.collections = {}
        self._handles = {}

    def _materialize(self, name):
        if name not in self.collections:
            self.collections[name] = self[name]

    def list_collection_names(self):
        return list(self.collections)

    def create_collection(self, name):
        self.server.writes += 1
        if name in self.collections:
            raise CollectionInvalid(f"collection {name} already exists")
        self._materialize(name)
        return self.collections[name]

    def __getitem__(self, name):
        if name not in self._handles:
            self._handles[name] = FakeCollection(self, name)
        return self._handles[name]


class FakeAdmin:
    def __init__(self, server):
        self.server = server

    def command(self, name):
        assert name == "ping"
        if self.server.unreachable_attempts > 0:
            self.server.unreachable_attempts -= 1
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1.0}


class FakeClient:
    def __init__(self, server, uri, **kwargs):
        self.server = server
        self.uri = uri
        self.kwargs = kwargs
        self.closed = False
        self.admin = FakeAdmin(server)

    def list_database_names(self):
        return [name for name, db in self.server.databases.items() if db.collections]

    def __getitem__(self, name):
        if name not in self.server.databases:
            self.server.databases[name] = FakeDatabase(self.server, name)
        return self.server.databases[name]

    def close(self):
        self.closed = True


class FakeMongoServer:
    """Shared state behind every FakeClient created by `client_factory`."""

    def __init__(self):
        self.databases = {}
        self.clients = []
        self.unreachable_attempts = 0
        self.failing_inserts = set()
        self.writes = 0

    def client_factory(self, uri, **kwargs):
        client = FakeClient(self, uri, **kwargs)
        self.clients.append(client)
        return client

    def database(self, name):
        if name not in self.databases:
            self.databases[name] = FakeDatabase(self, name)
        return self.databases[name]


@pytest.fixture
def mongo_server():
    return FakeMongoServer()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove bootstrap variables so defaults apply, and ignore any `.env`."""
    from mdm_init.config import Settings

    for key in Settings.model_fields:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    return monkeypatch
