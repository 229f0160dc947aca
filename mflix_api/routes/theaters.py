"""
Mflix API: Theater Route Handlers
=================================

What:  Collection and item endpoints for `theaters`; same shape as comments,
       without a parent entity or a timestamp field.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from mflix_api.schemas.common import (
    CreatedResponse,
    DataResponse,
    ErrorResponse,
    MessageResponse,
    PageRequest,
    encode_documents,
)
from mflix_api.schemas.theater import TheaterCreate, TheaterUpdate
from mflix_api.routes.deps import get_resolver, get_theater_service
from mflix_api.services.document_service import DocumentService
from mflix_api.services.resolver import PaginatedQueryResolver

router = APIRouter(prefix="/api/theaters", tags=["Theaters"])

ERROR_RESPONSES = {
    400: {"description": "Invalid theater ID or request body", "model": ErrorResponse},
    404: {"description": "Theater not found", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=DataResponse,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Get all theaters",
)
async def list_theaters(
    page: Optional[str] = Query(default=None, description="Page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Theaters per page (default 20)"),
    resolver: PaginatedQueryResolver = Depends(get_resolver),
) -> DataResponse:
    result = await resolver.resolve("theaters", page_request=PageRequest.from_query(page, limit))
    return DataResponse(
        data=encode_documents({"theaters": result.items, "pagination": result.pagination()})
    )


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Create a new theater",
)
async def create_theater(
    payload: TheaterCreate,
    theaters: DocumentService = Depends(get_theater_service),
) -> CreatedResponse:
    inserted_id = await theaters.create(payload.to_document())
    return CreatedResponse(
        message="Theater created successfully",
        data=encode_documents({"insertedId": inserted_id}),
    )


@router.get(
    "/{theater_id}",
    response_model=DataResponse,
    responses=ERROR_RESPONSES,
    summary="Get a theater by ID",
)
async def get_theater(
    theater_id: str,
    theaters: DocumentService = Depends(get_theater_service),
) -> DataResponse:
    theater = await theaters.get(theater_id)
    return DataResponse(data=encode_documents({"theater": theater}))


@router.put(
    "/{theater_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Update a theater by ID",
)
async def update_theater(
    theater_id: str,
    payload: TheaterUpdate,
    theaters: DocumentService = Depends(get_theater_service),
) -> MessageResponse:
    await theaters.update(theater_id, payload.to_fields())
    return MessageResponse(message="Theater updated successfully")


@router.delete(
    "/{theater_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a theater by ID",
)
async def delete_theater(
    theater_id: str,
    theaters: DocumentService = Depends(get_theater_service),
) -> MessageResponse:
    await theaters.delete(theater_id)
    return MessageResponse(message="Theater deleted successfully")
