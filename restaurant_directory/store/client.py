from __future__ import annotations

import logging
from typing import Any, Callable

from pymongo import MongoClient
from pymongo.database import Database

from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)


class MongoStore:
    """
    Explicitly opened handle on the directory database.

    The application opens it on startup and closes it on shutdown; handlers
    receive it through a dependency rather than a module-level global.

    Usage:
        store = MongoStore()
        store.open()
        restaurants = store.database["restaurants"]
        store.close()
    """

    def __init__(
        self,
        config: StoreConfig = DEFAULT_STORE_CONFIG,
        client_factory: Callable[..., Any] = MongoClient,
    ) -> None:
        self.config = config
        self._client_factory = client_factory
        self._client: Any | None = None
        self._database: Database | None = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def database(self) -> Database:
        if self._database is None:
            raise RuntimeError("MongoStore is not open")
        return self._database

    def open(self) -> Database:
        if self._client is None:
            self._client = self._client_factory(
                self.config.url,
                serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
            )
            self._database = self._client[self.config.database]
            logger.info("Opened document store %s (database %r)", self.config.url, self.config.database)
        return self._database

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._database = None
        logger.info("Closed document store %s", self.config.url)

    def __enter__(self) -> MongoStore:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
