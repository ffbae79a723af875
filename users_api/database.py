"""
Users API - MongoDB Client Management
=====================================

What:  The process-wide MongoDB client handle and its FastAPI dependencies.
Why:   Centralizes all database connection logic in one place.
How:   `connect()` builds one AsyncMongoClient and proves it with a ping.
       The lifespan stores the resulting handle on `app.state.mongo`;
       handlers reach the users collection through `get_users_collection`.
Who:   Used by the app lifespan and, via Depends(), by route handlers.
When:  Client is created once at startup; it is shared by every request.

Connection Strategy:
    One client for the lifetime of the process. The driver multiplexes
    concurrent operations over its own internal pool; the application adds
    no locking and no reconnect logic. A failed startup ping is fatal.

Why a dependency (not a module-level global):
    Tests override `get_users_collection` with an in-memory fake through
    `app.dependency_overrides`, so no handler ever reaches for global state.
"""

import logging

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from users_api.config import Settings, settings as default_settings
from users_api.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class MongoHandle:
    """
    Holds the single live MongoDB client and the names it is bound to.

    Attributes:
        client:   The shared AsyncMongoClient
        database: The configured database
        users:    The collection holding user documents
    """

    def __init__(self, client: AsyncMongoClient, database_name: str, collection_name: str):
        self.client = client
        self.database: AsyncDatabase = client[database_name]
        self.users: AsyncCollection = self.database[collection_name]

    async def ping(self) -> bool:
        """Round-trip a `ping` command; False if the server is unreachable."""
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True

    async def close(self) -> None:
        await self.client.close()


async def connect(config: Settings = default_settings) -> MongoHandle:
    """
    Establish the shared MongoDB client.

    What:    Creates the client from `config.mongo_uri` and pings the server.
    When:    Once, during application startup.

    The async client connects lazily, so the ping is what surfaces a bad
    URI or an unreachable server at startup rather than on the first request.

    Raises:
        DatabaseConnectionError: The client could not be created or the
            server did not answer within the server selection timeout.
    """
    try:
        client = AsyncMongoClient(
            config.mongo_uri,
            serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
        )
        await client.admin.command("ping")
    except PyMongoError as e:
        raise DatabaseConnectionError(
            message=f"Could not connect to MongoDB at {config.mongo_uri}",
            context={"error": str(e)},
        ) from e

    logger.info(
        "Connected to MongoDB (database=%s, collection=%s)",
        config.mongo_database,
        config.mongo_collection,
    )
    return MongoHandle(client, config.mongo_database, config.mongo_collection)


# ── Dependencies ──────────────────────────────────────────────────────────
def get_mongo(request: Request) -> MongoHandle:
    """FastAPI dependency returning the handle published by the lifespan."""
    return request.app.state.mongo


def get_users_collection(request: Request) -> AsyncCollection:
    """
    FastAPI dependency providing the users collection.

    Example usage in a route:
        @router.get("/users")
        async def list_users(collection=Depends(get_users_collection)):
            return await user_service.list_users(collection)
    """
    return get_mongo(request).users
