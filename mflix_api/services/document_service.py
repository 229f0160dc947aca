"""
Mflix API: Single-Document Operations
=====================================

What:  Get / create / update / delete of one document by id, for any collection.
Why:   The comment and theater endpoints differ only in collection name and
       wording of their messages; one parametrized service covers both (and
       the read-only movie lookup).
How:   Every id goes through parse_object_id first (400 before any query),
       missing documents become NotFoundError (404), and driver failures are
       wrapped in InternalError (500) with details kept in the log.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Dict, Optional, TypeVar

from mflix_api.exceptions import InternalError, NotFoundError, ValidationError
from mflix_api.services.identifiers import parse_object_id
from mflix_api.services.store import Document, DocumentStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentService:
    """
    Id-addressed operations on one collection.

    Args:
        store:       Data-store interface for this request
        collection:  Collection name, e.g. "comments"
        resource:    Singular noun used in messages, e.g. "comment"
        stamp_field: If set, written with the current UTC time on create
                     (when absent from the body) and on every update
    """

    def __init__(
        self,
        store: DocumentStore,
        collection: str,
        resource: str,
        stamp_field: Optional[str] = None,
    ):
        self.store = store
        self.collection = collection
        self.resource = resource
        self.stamp_field = stamp_field

    async def _run(self, action: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except Exception as e:
            logger.error(
                "Store error during %s on %s: %s",
                action,
                self.collection,
                str(e),
                exc_info=True,
            )
            raise InternalError(
                detail=type(e).__name__,
                context={"collection": self.collection, "action": action},
            )

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    async def get(self, raw_id: str) -> Document:
        oid = parse_object_id(raw_id, self.resource)
        document = await self._run("get", self.store.find_one(self.collection, {"_id": oid}))
        if document is None:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        return document

    async def create(self, document: Dict[str, Any]) -> Any:
        """Insert `document` and return its new ObjectId."""
        document = dict(document)
        if self.stamp_field and document.get(self.stamp_field) is None:
            document[self.stamp_field] = self._now()
        inserted_id = await self._run("create", self.store.insert_one(self.collection, document))
        logger.info("Created %s %s", self.resource, inserted_id)
        return inserted_id

    async def update(self, raw_id: str, fields: Dict[str, Any]) -> None:
        """
        `$set` the given fields.

        Raises:
            ValidationError: Bad id, or nothing to update
            NotFoundError:   No document matched
        """
        oid = parse_object_id(raw_id, self.resource)
        fields = dict(fields)
        if not fields:
            raise ValidationError(
                message="Invalid request body",
                detail=f"No {self.resource} fields to update were provided",
            )
        if self.stamp_field:
            fields[self.stamp_field] = self._now()

        matched = await self._run(
            "update", self.store.update_one(self.collection, {"_id": oid}, fields)
        )
        if matched == 0:
            raise NotFoundError(
                resource=self.resource,
                resource_id=raw_id,
                detail=f"No {self.resource} to update with the given ID",
            )
        logger.info("Updated %s %s (%s)", self.resource, raw_id, ", ".join(sorted(fields)))

    async def delete(self, raw_id: str) -> None:
        oid = parse_object_id(raw_id, self.resource)
        deleted = await self._run("delete", self.store.delete_one(self.collection, {"_id": oid}))
        if deleted == 0:
            raise NotFoundError(
                resource=self.resource,
                resource_id=raw_id,
                detail=f"No {self.resource} to delete with the given ID",
            )
        logger.info("Deleted %s %s", self.resource, raw_id)
