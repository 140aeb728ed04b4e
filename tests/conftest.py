"""
Shared fixtures: an in-memory stand-in for the Motor client, database and collections.

Only the driver surface the persistence core touches is modelled. Every driver call is a
coroutine, so the core's timeout wrapping and error translation run unchanged.
"""

import asyncio
import copy
from types import SimpleNamespace

from bson import ObjectId
from pymongo.errors import CollectionInvalid, DuplicateKeyError
import pytest

from event_blog.config import Settings
from event_blog.database.consistency import ConsistencyCoordinator
from event_blog.database.manager import DatabaseManager
from event_blog.database.provisioner import CollectionProvisioner
from event_blog.services import Services


def _matches(document, query):
    return all(document.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return [copy.deepcopy(document) for document in self._documents[:length]]


class FakeCollection:
    def __init__(self, name, database):
        self.name = name
        self.database = database
        self.documents = []
        self.indexes = {"_id_": {"key": [("_id", 1)]}}
        self.create_index_calls = 0

    def _unique_fields(self):
        return [
            [field for field, _ in index["key"]] for index in self.indexes.values() if index.get("unique")
        ]

    def _check_unique(self, document):
        for fields in self._unique_fields():
            for existing in self.documents:
                if all(existing.get(field) == document.get(field) for field in fields):
                    raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}", code=11000)

    async def insert_one(self, document):
        self._check_unique(document)
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        self.database.existing.add(self.name)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def insert_many(self, documents):
        inserted_ids = []
        for document in documents:
            result = await self.insert_one(document)
            inserted_ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=inserted_ids)

    async def find_one(self, query):
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query=None):
        return FakeCursor([document for document in self.documents if _matches(document, query or {})])

    async def update_many(self, query, update):
        matched = modified = 0
        for document in self.documents:
            if not _matches(document, query):
                continue
            matched += 1
            changes = update.get("$set", {})
            if any(document.get(key) != value for key, value in changes.items()):
                document.update(changes)
                modified += 1
        return SimpleNamespace(matched_count=matched, modified_count=modified)

    async def delete_one(self, query):
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, query):
        before = len(self.documents)
        self.documents = [document for document in self.documents if not _matches(document, query)]
        return SimpleNamespace(deleted_count=before - len(self.documents))

    async def index_information(self):
        return copy.deepcopy(self.indexes)

    async def create_index(self, keys, **options):
        self.create_index_calls += 1
        await asyncio.sleep(0)
        name = options.get("name") or "_".join(f"{field}_{direction}" for field, direction in keys)
        self.indexes[name] = {"key": list(keys), **{k: v for k, v in options.items() if k != "name"}}
        return name


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.existing = set()
        self.collections = {}
        self.list_calls = 0
        self.create_calls = 0

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, self)
        return self.collections[name]

    async def list_collection_names(self, filter=None):
        self.list_calls += 1
        await asyncio.sleep(0)
        names = sorted(self.existing)
        if filter and "name" in filter:
            names = [name for name in names if name == filter["name"]]
        return names

    async def create_collection(self, name):
        self.create_calls += 1
        await asyncio.sleep(0)
        if name in self.existing:
            raise CollectionInvalid(f"collection {name} already exists")
        self.existing.add(name)
        return self[name]


class FakeAdmin:
    def __init__(self):
        self.ping_calls = 0
        self.ping_error = None
        self.ping_delay = 0.01

    async def command(self, name):
        self.ping_calls += 1
        await asyncio.sleep(self.ping_delay)
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}


class FakeClient:
    def __init__(self):
        self.admin = FakeAdmin()
        self.databases = {}
        self.closed = False

    def __getitem__(self, name):
        if name not in self.databases:
            self.databases[name] = FakeDatabase(name)
        return self.databases[name]

    def close(self):
        self.closed = True


class FakeClientFactory:
    """Stands in for the Motor client class and counts construction attempts."""

    def __init__(self, client):
        self.client = client
        self.calls = 0
        self.url = None
        self.kwargs = None

    def __call__(self, url, **kwargs):
        self.calls += 1
        self.url = url
        self.kwargs = kwargs
        return self.client


@pytest.fixture
def test_settings():
    return Settings(
        MONGO_URL="mongodb://localhost:27017",
        MONGO_DB_NAME="event_blog_test",
        MONGO_OPERATION_TIMEOUT=0.5,
        PROVISION_ON_STARTUP=False,
    )


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def client_factory(fake_client):
    return FakeClientFactory(fake_client)


@pytest.fixture
def fake_db(fake_client, test_settings):
    return fake_client[test_settings.MONGO_DB_NAME]


@pytest.fixture
def manager(test_settings, client_factory):
    return DatabaseManager(test_settings, client_factory=client_factory)


@pytest.fixture
def provisioner(manager):
    return CollectionProvisioner(manager)


@pytest.fixture
def coordinator(provisioner):
    return ConsistencyCoordinator(provisioner)


@pytest.fixture
def services(manager):
    return Services.build(manager)
