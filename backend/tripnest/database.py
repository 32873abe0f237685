"""
TripNest Backend — Document Store Handle
==========================================

What:  MongoStore wraps one AsyncMongoClient and the tourist spot collection.
How:   The application lifespan constructs one MongoStore, pings it, stores it
       on `app.state.store`, and closes it on shutdown. Route handlers reach it
       through the `get_store` dependency; nothing in the package holds a
       module-level client.
Who:   Used by main.py (lifecycle), routes (dependency), health checks.

Connection model:
    One client per process. pymongo pools connections internally, so every
    request shares the handle without locking. There are no retries or
    timeouts configured beyond the driver defaults.
"""

import logging
from typing import Any, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.server_api import ServerApi

from tripnest.config import Settings

logger = logging.getLogger(__name__)


class MongoStore:
    """
    Explicitly constructed handle to the document store.

    Lifecycle:
        store = MongoStore.from_settings(settings)
        await store.connect()      # pings the deployment, raises on failure
        ... serve requests via store.collection ...
        await store.close()
    """

    def __init__(
        self,
        client: Any,
        db_name: str,
        collection_name: str,
    ):
        self._client = client
        self.db_name = db_name
        self.collection_name = collection_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoStore":
        """
        Create a store using the Stable API v1 in strict mode.

        The client connects lazily; nothing touches the network until connect().
        """
        client = AsyncMongoClient(
            settings.mongo_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )
        return cls(client, settings.db_name, settings.db_collection)

    @property
    def collection(self) -> AsyncCollection:
        return self._client[self.db_name][self.collection_name]

    async def ping(self) -> None:
        """Round-trip to the deployment. Raises a PyMongoError if unreachable."""
        await self._client.admin.command("ping")

    async def connect(self) -> None:
        await self.ping()
        logger.info(
            "Pinged your deployment. Connected to MongoDB (db=%s, collection=%s)",
            self.db_name,
            self.collection_name,
        )

    async def close(self) -> None:
        await self._client.close()
        logger.info("MongoDB client closed")


def get_store(request: Request) -> MongoStore:
    """
    FastAPI dependency returning the store created at startup.

    Raises:
        RuntimeError if the app was started without a store (lifespan skipped
        and none injected); the catch-all handler turns it into a 500.
    """
    store: Optional[MongoStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Document store is not initialised")
    return store
