"""
Mflix API: Route Dependencies
=============================

What:  FastAPI providers that build request-scoped services from the store.
Why:   Handlers declare what they need (`Depends(get_resolver)`) and tests swap
       the store in one place via `app.dependency_overrides[get_store]`.
"""

from fastapi import Depends

from mflix_api.database import get_store
from mflix_api.services.comment_service import CommentService
from mflix_api.services.document_service import DocumentService
from mflix_api.services.resolver import PaginatedQueryResolver
from mflix_api.services.store import DocumentStore


def get_resolver(store: DocumentStore = Depends(get_store)) -> PaginatedQueryResolver:
    return PaginatedQueryResolver(store)


def get_movie_service(store: DocumentStore = Depends(get_store)) -> DocumentService:
    return DocumentService(store, collection="movies", resource="movie")


def get_comment_service(store: DocumentStore = Depends(get_store)) -> CommentService:
    return CommentService(store)


def get_theater_service(store: DocumentStore = Depends(get_store)) -> DocumentService:
    return DocumentService(store, collection="theaters", resource="theater")
