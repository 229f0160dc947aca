"""
Mflix API: Movie Route Handlers
===============================

What:  GET /api/movies, GET /api/movies/{movie_id}, and the movie-scoped
       comment endpoints GET/POST /api/movies/{movie_id}/comments.
How:   Parse path/query/body, delegate to the resolver or services, wrap the
       result in the standard envelope. Errors propagate to the global
       handlers in main.py.

Movies are read-only here; only their comments can be written.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mflix_api.schemas.comment import MovieCommentCreate
from mflix_api.schemas.common import (
    CreatedResponse,
    DataResponse,
    ErrorResponse,
    PageRequest,
    encode_documents,
)
from mflix_api.routes.deps import get_comment_service, get_movie_service, get_resolver
from mflix_api.services.comment_service import CommentService
from mflix_api.services.document_service import DocumentService
from mflix_api.services.resolver import PaginatedQueryResolver, ParentCheck

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["Movies"])

ERROR_RESPONSES = {
    400: {"description": "Invalid movie ID or parameters", "model": ErrorResponse},
    404: {"description": "Movie not found", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=DataResponse,
    responses={
        400: ERROR_RESPONSES[400],
        500: ERROR_RESPONSES[500],
    },
    summary="List movies with pagination",
)
async def list_movies(
    page: Optional[str] = Query(default=None, description="Page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Movies per page (default 20)"),
    resolver: PaginatedQueryResolver = Depends(get_resolver),
) -> DataResponse:
    result = await resolver.resolve("movies", page_request=PageRequest.from_query(page, limit))
    return DataResponse(
        data=encode_documents({"movies": result.items, "pagination": result.pagination()})
    )


@router.get(
    "/{movie_id}",
    response_model=DataResponse,
    responses=ERROR_RESPONSES,
    summary="Get a movie by ID",
)
async def get_movie(
    movie_id: str,
    movies: DocumentService = Depends(get_movie_service),
) -> DataResponse:
    movie = await movies.get(movie_id)
    return DataResponse(data=encode_documents({"movie": movie}))


@router.get(
    "/{movie_id}/comments",
    response_model=DataResponse,
    responses=ERROR_RESPONSES,
    summary="Get comments for a specific movie",
    description=(
        "Pages through the comments whose movie_id is the given movie. "
        "Returns 404 when the movie itself does not exist, never an empty page."
    ),
)
async def list_movie_comments(
    movie_id: str,
    page: Optional[str] = Query(default=None, description="Page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Comments per page (default 20)"),
    resolver: PaginatedQueryResolver = Depends(get_resolver),
) -> DataResponse:
    result = await resolver.resolve(
        "comments",
        page_request=PageRequest.from_query(page, limit),
        parent=ParentCheck(
            collection="movies", resource="movie", id=movie_id, foreign_key="movie_id"
        ),
    )
    return DataResponse(
        data=encode_documents(
            {
                "movie_id": movie_id,
                "movie_title": (result.parent or {}).get("title"),
                "comments": result.items,
                "pagination": result.pagination(),
            }
        )
    )


@router.post(
    "/{movie_id}/comments",
    status_code=201,
    response_model=CreatedResponse,
    responses=ERROR_RESPONSES,
    summary="Add a comment to a movie",
)
async def add_movie_comment(
    movie_id: str,
    payload: MovieCommentCreate,
    comments: CommentService = Depends(get_comment_service),
) -> CreatedResponse:
    movie, comment_id = await comments.create_for_movie(movie_id, payload)
    return CreatedResponse(
        message="Comment added successfully",
        data=encode_documents(
            {
                "movie_id": movie_id,
                "movie_title": movie.get("title"),
                "comment_id": comment_id,
            }
        ),
    )
