import logging
import re
import threading
from collections.abc import Callable
from typing import Any, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError


logger = logging.getLogger(__name__)

CATEGORIES = "categories"
PRODUCTS = "products"
CAROUSEL_ITEMS = "carouselItems"

ClientFactory = Callable[[str], Any]


def mask_uri(uri: str) -> str:
    """Hides the credentials part of a connection string for logging."""
    return re.sub(r"://[^@/]+@", "://***@", uri)


class MongoConnectionPool:
    """Process-wide handle to the MongoDB document store.

    The pool is constructed once at startup and handed to every service.
    The underlying client is created lazily on first use, and a cached
    client is pinged before reuse so a dropped connection is replaced
    transparently.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        """
        Args:
            uri (str): The MongoDB connection string.
            db_name (str): The database holding the storefront collections.
            client_factory (Optional[ClientFactory]): Builds a client from the
                URI. Defaults to pymongo's MongoClient; tests inject mongomock.

        Raises:
            ValueError: If either the URI or the database name is empty.
        """
        if not uri:
            raise ValueError("MONGODB_URI environment variable is not set in .env")
        if not db_name:
            raise ValueError("MONGODB_DB_NAME environment variable is not set in .env")

        self.uri = uri
        self.db_name = db_name
        self._client_factory = client_factory or MongoClient
        self._client: Any = None
        self._lock = threading.Lock()

    def _is_alive(self, client: Any) -> bool:
        try:
            client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB cached connection ping failed, attempting to reconnect... {e}")
            return False

    def get_database(self) -> Database:
        """Returns the storefront database, (re)connecting when needed.

        Raises:
            PyMongoError: If a new connection cannot be established.
        """
        with self._lock:
            if self._client is not None and not self._is_alive(self._client):
                self._discard()

            if self._client is None:
                logger.info(f"Attempting new MongoDB connection to URI: {mask_uri(self.uri)}")
                client = self._client_factory(self.uri)
                try:
                    client.admin.command("ping")
                except PyMongoError:
                    logger.error("Failed to connect to MongoDB", exc_info=True)
                    client.close()
                    raise
                self._client = client
                logger.info(f"Connected to MongoDB database: {self.db_name}")

            return self._client[self.db_name]

    def get_collection(self, name: str) -> Collection:
        return self.get_database()[name]

    def _discard(self) -> None:
        try:
            self._client.close()
        except PyMongoError as e:
            logger.debug(f"Ignoring error while closing stale MongoDB client: {e}")
        self._client = None

    def close(self) -> None:
        """Closes the cached client, if any. Called on application shutdown."""
        with self._lock:
            if self._client is not None:
                self._discard()
