"""
Mflix API: Document Store Interface
===================================

What:  Abstract data-store contract plus its MongoDB (motor) implementation.
Why:   Services depend on this interface, never on the global client, so they
       can be exercised against an in-memory double in tests and against a
       real deployment in production without change.
How:   MongoDocumentStore adapts a motor database handle; every method maps
       one-to-one onto a single collection operation.

Contract:
    find_one(collection, query)               → document | None
    find(collection, query, skip, limit)      → list of documents
    count_documents(collection, query)        → int
    insert_one(collection, document)          → inserted id
    update_one(collection, query, fields)     → matched count ($set update)
    delete_one(collection, query)             → deleted count

Driver errors propagate unchanged; services decide how to translate them.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

Document = Dict[str, Any]


class DocumentStore(ABC):
    """Single-collection read/write operations used by the services layer."""

    @abstractmethod
    async def find_one(self, collection: str, query: Mapping[str, Any]) -> Optional[Document]:
        ...

    @abstractmethod
    async def find(
        self,
        collection: str,
        query: Mapping[str, Any],
        skip: int = 0,
        limit: int = 0,
    ) -> List[Document]:
        """
        Return matching documents in natural store order.

        No sort is applied, so the order is whatever the server's scan yields
        and is not guaranteed stable between calls.
        """
        ...

    @abstractmethod
    async def count_documents(self, collection: str, query: Mapping[str, Any]) -> int:
        ...

    @abstractmethod
    async def insert_one(self, collection: str, document: Document) -> Any:
        ...

    @abstractmethod
    async def update_one(
        self, collection: str, query: Mapping[str, Any], fields: Document
    ) -> int:
        ...

    @abstractmethod
    async def delete_one(self, collection: str, query: Mapping[str, Any]) -> int:
        ...


class MongoDocumentStore(DocumentStore):
    """DocumentStore backed by a motor database handle."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def find_one(self, collection, query):
        return await self.db[collection].find_one(query)

    async def find(self, collection, query, skip=0, limit=0):
        cursor = self.db[collection].find(query).skip(skip).limit(limit)
        # length=None drains the cursor; the server-side limit bounds it
        return await cursor.to_list(length=limit or None)

    async def count_documents(self, collection, query):
        return await self.db[collection].count_documents(query)

    async def insert_one(self, collection, document):
        result = await self.db[collection].insert_one(document)
        return result.inserted_id

    async def update_one(self, collection, query, fields):
        result = await self.db[collection].update_one(query, {"$set": fields})
        return result.matched_count

    async def delete_one(self, collection, query):
        result = await self.db[collection].delete_one(query)
        return result.deleted_count
