"""
Blog API — Database Client Management
======================================

What:  Motor (async MongoDB) client factory, startup ping, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   One client with a bounded connection pool is created when the app starts
       and closed when it stops. Handlers receive the posts collection through
       a dependency instead of connecting on every request.
Who:   Used by the lifespan handler in main.py and by route handlers via Depends().

Connection Pooling Strategy:
    maxPoolSize=20:              Upper bound on concurrent sockets per server
    minPoolSize=0:               Connections are opened lazily
    serverSelectionTimeoutMS:    How long an operation waits for a usable server
    timeoutMS:                   Client-side deadline for every operation

    Any of these limits being hit raises a PyMongoError, which the service layer
    turns into a 500 response.
"""

import logging

from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
)
from pymongo.errors import ConnectionFailure
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
)

from blog_api.config import Settings, settings

logger = logging.getLogger(__name__)


# ── Client Factory ────────────────────────────────────────────────────────
def create_client(config: Settings = settings) -> AsyncIOMotorClient:
    """
    Build the process-wide Motor client.

    Creating the client does not perform any I/O; the driver connects in the
    background and on first use. Call `verify_connection` to fail fast.
    """
    return AsyncIOMotorClient(
        config.mongo_url,
        maxPoolSize=config.mongo_max_pool_size,
        minPoolSize=config.mongo_min_pool_size,
        serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
        timeoutMS=config.mongo_timeout_ms,
    )


def get_collection(
    client: AsyncIOMotorClient, config: Settings = settings
) -> AsyncIOMotorCollection:
    """Returns the configured posts collection from a client."""
    return client[config.mongo_database][config.mongo_collection]


# ── Startup Check ─────────────────────────────────────────────────────────
@retry(
    # ServerSelectionTimeoutError and AutoReconnect both derive from ConnectionFailure
    retry=retry_if_exception_type(ConnectionFailure),
    stop=stop_after_attempt(settings.connect_retry_attempts),
    wait=wait_exponential_jitter(
        initial=settings.connect_retry_min_wait,
        max=settings.connect_retry_max_wait,
        jitter=1,
    ),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def verify_connection(client: AsyncIOMotorClient) -> None:
    """
    Sends a `ping` to the primary, retrying transient connection failures.

    Raises:
        ConnectionFailure: The server stayed unreachable for every attempt.
    """
    await client.admin.command("ping")
    logger.info("MongoDB ping succeeded")


# ── Collection Dependency ─────────────────────────────────────────────────
def get_posts_collection(request: Request) -> AsyncIOMotorCollection:
    """
    FastAPI dependency that provides the posts collection.

    The collection is attached to `app.state` by the lifespan handler, so every
    request shares the same pooled client. Tests replace this dependency via
    `app.dependency_overrides`.
    """
    return request.app.state.posts_collection


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
def close_client(client: AsyncIOMotorClient) -> None:
    """
    What:  Closes every pooled connection held by the client.
    When:  Called during application shutdown (lifespan handler).
    """
    client.close()
