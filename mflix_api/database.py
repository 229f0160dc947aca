"""
Mflix API: MongoDB Connection Management
========================================

What:  Process-wide motor client, database handle, and FastAPI store dependency.
Why:   Centralizes all connection logic in one place; nothing else in the
       codebase constructs a client.
How:   The client is created lazily on first use and reused by every request.
       The driver pools sockets internally, so concurrent requests share
       connections without re-negotiating per call.
Who:   Route handlers receive a DocumentStore through `Depends(get_store)`;
       the lifespan in main.py pings on startup and closes on shutdown.

Lifecycle:
    init-once (first get_client call) → reused → closed by close_client()
    The client is never closed implicitly; only the application lifespan
    ends it.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from mflix_api.config import settings
from mflix_api.exceptions import InternalError
from mflix_api.services.store import DocumentStore, MongoDocumentStore

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """
    Return the shared client, creating it on first call.

    Creating an AsyncIOMotorClient does not open sockets; the first operation
    does. An unset URI is reported as InternalError so requests get a 500
    envelope instead of a driver traceback.
    """
    global _client
    if _client is None:
        if not settings.mongodb_uri:
            raise InternalError(
                message="Database is not configured",
                detail="MONGODB_URI is not set",
            )
        _client = AsyncIOMotorClient(
            settings.mongodb_uri,
            maxPoolSize=settings.mongodb_max_pool_size,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            appname="mflix-api",
        )
        logger.info(
            "MongoDB client created (database=%s, max_pool_size=%d)",
            settings.mongodb_database,
            settings.mongodb_max_pool_size,
        )
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """Handle to the configured database (`sample_mflix` by default)."""
    return get_client()[settings.mongodb_database]


async def ping() -> None:
    """Round-trip the `ping` admin command. Raises on any driver failure."""
    await get_client().admin.command("ping")


@retry(
    retry=retry_if_exception_type(PyMongoError),
    stop=stop_after_attempt(settings.retry_max_attempts),
    wait=wait_exponential_jitter(
        initial=settings.retry_min_wait,
        max=settings.retry_max_wait,
        jitter=1,
    ),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def wait_for_database() -> None:
    """
    Startup connection check.

    Retries transient driver errors with exponential backoff so a server
    that is still booting (docker compose) does not leave the app flagged
    as disconnected. Only the lifespan calls this.
    """
    await ping()
    logger.info("Pinged your deployment. Successfully connected to MongoDB")


def close_client() -> None:
    """Close every pooled connection. Called during application shutdown."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")


def get_store() -> DocumentStore:
    """
    FastAPI dependency providing the data-store interface for one request.

    The wrapper is cheap; the expensive part (the client and its pool) is
    shared across requests.
    """
    return MongoDocumentStore(get_database())
