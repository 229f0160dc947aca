"""
Mflix API: Comment Route Handlers
=================================

What:  Collection and item endpoints for `comments`.

Route Inventory:
    GET    /api/comments                 paginated list
    POST   /api/comments                 create (movie_id in body must exist)
    GET    /api/comments/{comment_id}    single comment
    PUT    /api/comments/{comment_id}    partial update, refreshes `date`
    DELETE /api/comments/{comment_id}    delete
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from mflix_api.schemas.comment import CommentCreate, CommentUpdate
from mflix_api.schemas.common import (
    CreatedResponse,
    DataResponse,
    ErrorResponse,
    MessageResponse,
    PageRequest,
    encode_documents,
)
from mflix_api.routes.deps import get_comment_service, get_resolver
from mflix_api.services.comment_service import CommentService
from mflix_api.services.resolver import PaginatedQueryResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/comments", tags=["Comments"])

ERROR_RESPONSES = {
    400: {"description": "Invalid comment ID or request body", "model": ErrorResponse},
    404: {"description": "Comment not found", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=DataResponse,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Get all comments",
)
async def list_comments(
    page: Optional[str] = Query(default=None, description="Page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Comments per page (default 20)"),
    resolver: PaginatedQueryResolver = Depends(get_resolver),
) -> DataResponse:
    result = await resolver.resolve("comments", page_request=PageRequest.from_query(page, limit))
    return DataResponse(
        data=encode_documents({"comments": result.items, "pagination": result.pagination()})
    )


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={
        400: ERROR_RESPONSES[400],
        404: {"description": "Referenced movie not found", "model": ErrorResponse},
        500: ERROR_RESPONSES[500],
    },
    summary="Create a new comment",
)
async def create_comment(
    payload: CommentCreate,
    comments: CommentService = Depends(get_comment_service),
) -> CreatedResponse:
    inserted_id = await comments.create_comment(payload)
    return CreatedResponse(
        message="Comment created successfully",
        data=encode_documents({"insertedId": inserted_id}),
    )


@router.get(
    "/{comment_id}",
    response_model=DataResponse,
    responses=ERROR_RESPONSES,
    summary="Get a comment by ID",
)
async def get_comment(
    comment_id: str,
    comments: CommentService = Depends(get_comment_service),
) -> DataResponse:
    comment = await comments.get(comment_id)
    return DataResponse(data=encode_documents({"comment": comment}))


@router.put(
    "/{comment_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Update a comment by ID",
)
async def update_comment(
    comment_id: str,
    payload: CommentUpdate,
    comments: CommentService = Depends(get_comment_service),
) -> MessageResponse:
    await comments.update(comment_id, payload.to_fields())
    return MessageResponse(message="Comment updated successfully")


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a comment by ID",
)
async def delete_comment(
    comment_id: str,
    comments: CommentService = Depends(get_comment_service),
) -> MessageResponse:
    await comments.delete(comment_id)
    return MessageResponse(message="Comment deleted successfully")
