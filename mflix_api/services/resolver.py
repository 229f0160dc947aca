"""
Mflix API: Paginated Query Resolver
===================================

What:  The list query shared by every collection endpoint.
Why:   Movies, comments, theaters, and "comments of movie X" all page the same
       way; the existence check for a parent entity lives here so no route
       can forget it.
Who:   Called by route handlers through the `get_resolver` dependency.

Resolution Flow:
    ┌────────────────┐   ┌────────────────┐   ┌─────────────────────┐   ┌──────────┐
    │ Validate parent│──▶│ Fetch parent   │──▶│ find(skip, limit)   │──▶│ pages =  │
    │ id format      │   │ (404 if absent)│   │ count(same filter)  │   │ ceil(t/l)│
    └────────────────┘   └────────────────┘   └─────────────────────┘   └──────────┘
          400                  404                    500 on driver error

    The parent lookup runs before the page query, so an unknown parent never
    produces an empty-but-successful page.

Ordering:
    No sort is applied. Items come back in natural store order, which is not
    guaranteed stable across calls (or across pages while writes happen).
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from mflix_api.exceptions import InternalError, MflixError, NotFoundError
from mflix_api.schemas.common import PageRequest, PageResult, page_count
from mflix_api.services.identifiers import parse_object_id
from mflix_api.services.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParentCheck:
    """
    Parent-scoped query description.

    Example: comments of a movie
        ParentCheck(collection="movies", resource="movie",
                    id="573a1390f29313caabcd42e8", foreign_key="movie_id")
    """

    collection: str
    resource: str
    id: str
    foreign_key: str


class PaginatedQueryResolver:
    """
    Read-only page queries against a DocumentStore.

    Stateless apart from the store it was built with; one instance per
    request is fine and so is sharing one.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def resolve(
        self,
        collection: str,
        query: Optional[Mapping[str, Any]] = None,
        page_request: Optional[PageRequest] = None,
        parent: Optional[ParentCheck] = None,
    ) -> PageResult:
        """
        Return one page of `collection` matching `query`.

        Args:
            collection:   Collection to page through
            query:        Field → expected value mapping (empty = everything)
            page_request: Page/limit pair; defaults to page 1 of the default size
            parent:       Optional parent entity that must exist first. Its id
                          is added to the query under `parent.foreign_key`.

        Raises:
            ValidationError: Parent id is not a valid ObjectId (no store access)
            NotFoundError:   Parent id is valid but no such document exists
            InternalError:   The store failed
        """
        page_request = page_request or PageRequest()
        criteria: Dict[str, Any] = dict(query or {})

        # Format check happens before the try block: nothing touches the store
        parent_oid = parse_object_id(parent.id, parent.resource) if parent else None

        try:
            parent_doc = None
            if parent is not None:
                parent_doc = await self.store.find_one(parent.collection, {"_id": parent_oid})
                if parent_doc is None:
                    raise NotFoundError(resource=parent.resource, resource_id=parent.id)
                criteria[parent.foreign_key] = parent_oid

            items = await self.store.find(
                collection,
                criteria,
                skip=page_request.skip,
                limit=page_request.limit,
            )
            total = await self.store.count_documents(collection, criteria)

        except MflixError:
            raise
        except Exception as e:
            logger.error(
                "Store error paging %s (page=%d, limit=%d): %s",
                collection,
                page_request.page,
                page_request.limit,
                str(e),
                exc_info=True,
            )
            raise InternalError(
                detail=type(e).__name__,
                context={"collection": collection, "error_type": type(e).__name__},
            )

        logger.debug(
            "Paged %s: %d of %d (page %d)", collection, len(items), total, page_request.page
        )

        return PageResult(
            items=items,
            total=total,
            page=page_request.page,
            limit=page_request.limit,
            pages=page_count(total, page_request.limit),
            parent=parent_doc,
        )
