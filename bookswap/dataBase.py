"""Record storage for the registry.

Each entity type lives in its own ordered map keyed by its identifier.
``MemoryMap`` keeps documents in process; ``MongoMap`` keeps them in one
MongoDB collection per entity.  ``EntityStore`` sits on top of a map and
converts documents to entity models, so every read hands out a fresh
copy and callers never share state with the store.
"""

import logging
from typing import Dict, Generic, Iterator, List, Optional, Protocol, Type, TypeVar

from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import Settings
from .models import Book, Feedback, SwapRequest, User

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)


class StoreError(Exception):
    """The backing store failed to complete a read or write."""


class OrderedMap(Protocol):
    def get(self, key: str) -> Optional[dict]: ...

    def insert(self, key: str, document: dict) -> None: ...

    def remove(self, key: str) -> None: ...

    def values(self) -> Iterator[dict]: ...


class MemoryMap:
    """In-process map; iterates in key order."""

    def __init__(self) -> None:
        self._documents: Dict[str, dict] = {}

    def get(self, key: str) -> Optional[dict]:
        document = self._documents.get(key)
        return dict(document) if document is not None else None

    def insert(self, key: str, document: dict) -> None:
        self._documents[key] = dict(document)

    def remove(self, key: str) -> None:
        self._documents.pop(key, None)

    def values(self) -> Iterator[dict]:
        for key in sorted(self._documents):
            yield dict(self._documents[key])

    def __len__(self) -> int:
        return len(self._documents)


class MongoMap:
    """Map backed by a MongoDB collection; the key is stored as ``_id``."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    @staticmethod
    def _strip_id(document: dict) -> dict:
        document = dict(document)
        del document["_id"]
        return document

    def get(self, key: str) -> Optional[dict]:
        try:
            document = self.collection.find_one({"_id": key})
        except PyMongoError as e:
            raise StoreError(f"Error reading {key} from {self.collection.name}: {e}") from e
        return self._strip_id(document) if document else None

    def insert(self, key: str, document: dict) -> None:
        try:
            self.collection.replace_one({"_id": key}, {"_id": key, **document}, upsert=True)
        except PyMongoError as e:
            raise StoreError(f"Error writing {key} to {self.collection.name}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.collection.delete_one({"_id": key})
        except PyMongoError as e:
            raise StoreError(f"Error deleting {key} from {self.collection.name}: {e}") from e

    def values(self) -> Iterator[dict]:
        try:
            documents = list(self.collection.find().sort("_id", ASCENDING))
        except PyMongoError as e:
            raise StoreError(f"Error listing {self.collection.name}: {e}") from e
        for document in documents:
            yield self._strip_id(document)


class EntityStore(Generic[E]):
    """Typed view over an ``OrderedMap`` holding one entity type."""

    def __init__(self, backend: OrderedMap, model: Type[E]) -> None:
        self.backend = backend
        self.model = model

    def get(self, key: str) -> Optional[E]:
        document = self.backend.get(key)
        if document is None:
            return None
        return self.model.model_validate(document)

    def insert(self, key: str, entity: E) -> None:
        """Create or overwrite the record stored under ``key``."""
        self.backend.insert(key, entity.model_dump(mode="json"))

    def remove(self, key: str) -> None:
        self.backend.remove(key)

    def values(self) -> List[E]:
        return [self.model.model_validate(document) for document in self.backend.values()]


class Repository:
    """The four entity stores.  Nothing else in the registry touches persistent state."""

    def __init__(
        self,
        users: OrderedMap,
        books: OrderedMap,
        swap_requests: OrderedMap,
        feedback: OrderedMap,
    ) -> None:
        self.users: EntityStore[User] = EntityStore(users, User)
        self.books: EntityStore[Book] = EntityStore(books, Book)
        self.swap_requests: EntityStore[SwapRequest] = EntityStore(swap_requests, SwapRequest)
        self.feedback: EntityStore[Feedback] = EntityStore(feedback, Feedback)

    @classmethod
    def in_memory(cls) -> "Repository":
        return cls(MemoryMap(), MemoryMap(), MemoryMap(), MemoryMap())

    @classmethod
    def from_mongo(cls, db: Database) -> "Repository":
        return cls(
            MongoMap(db.users),
            MongoMap(db.books),
            MongoMap(db.swap_requests),
            MongoMap(db.feedback),
        )


def get_database(settings: Settings) -> Database:
    client = MongoClient(settings.mongo_url)
    return client[settings.mongo_db]


def build_repository(settings: Settings) -> Repository:
    """Create the repository selected by ``settings.store_backend``."""
    backend = settings.store_backend.lower()
    if backend == "memory":
        return Repository.in_memory()
    if backend == "mongo":
        logger.info("Using MongoDB store %s", settings.mongo_db)
        return Repository.from_mongo(get_database(settings))
    raise ValueError(f"Unknown store backend: {settings.store_backend}")
