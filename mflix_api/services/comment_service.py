"""
Mflix API: Comment Service
==========================

What:  Comment CRUD plus the two creation paths that reference a movie.
Why:   A comment is only meaningful for a movie that exists, so both
       POST /api/comments (movie_id in the body) and
       POST /api/movies/{id}/comments (movie_id in the path) confirm the movie
       before inserting.
"""

import logging
from typing import Any, Dict, Tuple

from mflix_api.schemas.comment import CommentCreate, MovieCommentCreate
from mflix_api.services.document_service import DocumentService
from mflix_api.services.store import Document, DocumentStore

logger = logging.getLogger(__name__)


class CommentService(DocumentService):
    """Comments collection; `date` is stamped on create and on update."""

    def __init__(self, store: DocumentStore):
        super().__init__(store, collection="comments", resource="comment", stamp_field="date")
        self.movies = DocumentService(store, collection="movies", resource="movie")

    async def create_comment(self, payload: CommentCreate) -> Any:
        """
        Insert a comment whose movie is named in the body.

        Raises:
            ValidationError: movie_id is not an ObjectId
            NotFoundError:   No such movie
        """
        movie = await self.movies.get(payload.movie_id)
        document: Dict[str, Any] = payload.model_dump(exclude={"movie_id"})
        document["movie_id"] = movie["_id"]
        return await self.create(document)

    async def create_for_movie(
        self, movie_id: str, payload: MovieCommentCreate
    ) -> Tuple[Document, Any]:
        """Insert a comment under the movie in the path; returns (movie, comment id)."""
        movie = await self.movies.get(movie_id)
        document: Dict[str, Any] = payload.model_dump()
        document["movie_id"] = movie["_id"]
        comment_id = await self.create(document)
        return movie, comment_id
