"""
Checkpoint storage backends.

A checkpoint store is a tiny key-value map holding the last notified version.
Backends:
- MongoDB via motor (one document per key)
- A local JSON file for single-host deployments
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import ConnectionFailure

logger = structlog.get_logger(__name__)


class CheckpointStore:
    """Interface for durable get/put of checkpoint values."""

    async def connect(self) -> None:
        """Open any underlying connection."""

    async def disconnect(self) -> None:
        """Release any underlying connection."""

    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def put(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def health_check(self) -> str:
        """Return "healthy" or "unhealthy"."""
        return "healthy"


class MongoCheckpointStore(CheckpointStore):
    """
    Async MongoDB checkpoint store.
    Keeps each key as ``{_id: key, value, updated_at}``.
    """

    def __init__(self, connection_url: str, database_name: str, collection_name: str):
        """
        Initialize MongoDB checkpoint store.

        Args:
            connection_url: MongoDB connection URL
            database_name: Name of the database
            collection_name: Name of the collection
        """
        self.connection_url = connection_url
        self.database_name = database_name
        self.collection_name = collection_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(self.connection_url)
            self.collection = self.client[self.database_name][self.collection_name]

            await self.client.admin.command('ping')
            logger.info("Successfully connected to MongoDB",
                        database=self.database_name,
                        collection=self.collection_name)

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            self.client = None
            self.collection = None
            logger.info("Disconnected from MongoDB")

    def _require_collection(self) -> AsyncIOMotorCollection:
        if self.collection is None:
            raise RuntimeError("Checkpoint store not connected; call connect() first")
        return self.collection

    async def get(self, key: str) -> Optional[str]:
        document = await self._require_collection().find_one({"_id": key})
        if document is None:
            return None
        return document.get("value")

    async def put(self, key: str, value: str) -> None:
        await self._require_collection().update_one(
            {"_id": key},
            {"$set": {"value": value, "updated_at": datetime.utcnow()}},
            upsert=True
        )
        logger.debug("Stored checkpoint", key=key, value=value)

    async def health_check(self) -> str:
        try:
            if self.client is None:
                return "unhealthy"
            await self.client.admin.command('ping')
            return "healthy"
        except Exception as e:
            logger.error("MongoDB health check failed", error=str(e))
            return "unhealthy"


class FileCheckpointStore(CheckpointStore):
    """Checkpoint store backed by a local JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        tmp_path.replace(self.path)

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            return self._read().get(key)

    async def put(self, key: str, value: str) -> None:
        async with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)
        logger.debug("Stored checkpoint", key=key, value=value, path=str(self.path))

    async def health_check(self) -> str:
        try:
            self._read()
            return "healthy"
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Checkpoint file unreadable", path=str(self.path), error=str(e))
            return "unhealthy"


def create_checkpoint_store(config) -> CheckpointStore:
    """Create the checkpoint store selected by ``config.checkpoint_backend``."""
    if config.checkpoint_backend == "file":
        return FileCheckpointStore(config.get_checkpoint_file_path())

    return MongoCheckpointStore(
        connection_url=config.mongodb_url,
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection
    )
