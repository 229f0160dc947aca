"""
Mflix API: Shared Request/Response Schemas
==========================================

What:  Pagination models, response envelopes, and document encoding.
Why:   Every collection endpoint pages the same way and answers with the same
       envelope, so the contract lives in one module.

Envelopes:
    Success:  {"status": 200, "data": {...}}
    Created:  {"status": 201, "message": "...", "data": {...}}
    Message:  {"status": 200, "message": "..."}
    Error:    {"status": 4xx/5xx, "message": "...", "error": "...", "request_id": "..."}
"""

import re
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field, model_validator

from mflix_api.config import settings
from mflix_api.exceptions import ValidationError


# ══════════════════════════════════════════════════════════════════════════
# Pagination
# ══════════════════════════════════════════════════════════════════════════


# Largest skip BSON can encode (signed 64-bit); deeper pages cannot be sent
MAX_SKIP = 2**63 - 1

_INTEGER_TEXT = re.compile(r"-?[0-9]+")


def _coerce_int(raw: Optional[str], default: int) -> int:
    # Anything but plain ASCII digits ("abc", "2.5", "1_0", "+5") falls back to default
    if raw is None:
        return default
    text = raw.strip()
    if not _INTEGER_TEXT.fullmatch(text):
        return default
    return int(text)


def page_count(total: int, limit: int) -> int:
    """ceil(total / limit) in integer arithmetic; 0 when there is nothing to page."""
    return (total + limit - 1) // limit


class PageRequest(BaseModel):
    """
    What:  Validated page/limit pair for every list endpoint.

    Bounds:
        page:  >= 1 and (page - 1) * limit <= MAX_SKIP, default 1
        limit: 1..settings.max_page_limit, default settings.default_page_limit

    Query strings are parsed by `from_query`, which substitutes defaults for
    missing or non-numeric values but rejects out-of-range integers instead of
    silently clamping them. Direct construction enforces the same bounds.
    """

    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(
        default_factory=lambda: settings.default_page_limit,
        ge=1,
        description="Documents per page",
    )

    @model_validator(mode="after")
    def check_bounds(self) -> "PageRequest":
        if self.limit > settings.max_page_limit:
            raise ValueError(f"limit must not exceed {settings.max_page_limit}")
        if self.skip > MAX_SKIP:
            raise ValueError("page is too large")
        return self

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(cls, page: Optional[str] = None, limit: Optional[str] = None) -> "PageRequest":
        page_value = _coerce_int(page, 1)
        limit_value = _coerce_int(limit, settings.default_page_limit)

        if limit_value < 1 or limit_value > settings.max_page_limit:
            raise ValidationError(
                message="Invalid limit parameter",
                detail=f"limit must be an integer between 1 and {settings.max_page_limit}",
                field="limit",
            )
        max_page = MAX_SKIP // limit_value + 1
        if page_value < 1 or page_value > max_page:
            raise ValidationError(
                message="Invalid page parameter",
                detail=f"page must be an integer between 1 and {max_page}",
                field="page",
            )
        return cls(page=page_value, limit=limit_value)


class Pagination(BaseModel):
    total: int = Field(description="Documents matching the filter")
    page: int = Field(description="Current page (1-based)")
    pages: int = Field(description="ceil(total / limit)")


class PageResult(BaseModel):
    """
    What:  One page of documents plus count metadata.
    Who:   Returned by PaginatedQueryResolver.resolve().

    `parent` holds the document confirmed by a parent check (e.g. the movie
    whose comments were listed), so routes can echo fields like its title
    without a second lookup.
    """

    items: List[Dict[str, Any]]
    total: int
    page: int
    limit: int
    pages: int
    parent: Optional[Dict[str, Any]] = None

    def pagination(self) -> Pagination:
        return Pagination(total=self.total, page=self.page, pages=self.pages)


# ══════════════════════════════════════════════════════════════════════════
# Envelopes
# ══════════════════════════════════════════════════════════════════════════


def encode_documents(value: Any) -> Any:
    """Make store documents JSON-safe: ObjectId → hex string, datetime → ISO 8601."""
    return jsonable_encoder(value, custom_encoder={ObjectId: str})


class DataResponse(BaseModel):
    status: int = Field(default=200, description="Mirrors the HTTP status code")
    data: Dict[str, Any]


class CreatedResponse(BaseModel):
    status: int = Field(default=201, description="Mirrors the HTTP status code")
    message: str
    data: Dict[str, Any]


class MessageResponse(BaseModel):
    status: int = Field(default=200, description="Mirrors the HTTP status code")
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error envelope for all API errors.

    Example:
        {
            "status": 400,
            "message": "Invalid movie ID",
            "error": "ID format is incorrect",
            "request_id": "1f2e3d4c"
        }
    """

    status: int = Field(description="Mirrors the HTTP status code")
    message: str = Field(description="Human-readable error description")
    error: str = Field(description="Short explanation of what went wrong")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    database_name: str = Field(description="Configured database, e.g. sample_mflix")
    ping_ms: Optional[float] = Field(default=None, description="Ping round trip; null when down")
    uptime_seconds: float = Field(description="Seconds since service started")
