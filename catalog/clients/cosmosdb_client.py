"""Azure Cosmos DB client for product storage."""

import asyncio
import logging
from typing import Any, Optional

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient
from azure.cosmos.aio._container import ContainerProxy
from azure.cosmos.aio._database import DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from catalog.config.configuration import get_config

logger = logging.getLogger(__name__)


class CosmosDBClient:
    """Async Cosmos DB client with connection management.

    Uses the NoSQL API for storing and querying product documents. The
    container is created on first connect with a unique key policy on
    ``/slug``. Unique keys are scoped to a logical partition, so every
    product shares one partition key value.
    Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(
        self,
        connection_string: str,
        database_name: str,
        container_name: str,
        partition_key_path: str = "/type",
        unique_key_paths: tuple[str, ...] = ("/slug",),
    ):
        """Initialize the Cosmos DB client.

        Args:
            connection_string: Cosmos DB account connection string
            database_name: Name of the database to use
            container_name: Name of the container to use
            partition_key_path: Path to the partition key field (default: /type)
            unique_key_paths: Paths that must be unique within a partition
        """
        self._connection_string = connection_string
        self._database_name = database_name
        self._container_name = container_name
        self._partition_key_path = partition_key_path
        self._unique_key_paths = unique_key_paths

        self._client: Optional[CosmosClient] = None
        self._database: Optional[DatabaseProxy] = None
        self._container: Optional[ContainerProxy] = None

    async def connect(self) -> None:
        """Establish connection and ensure database/container exist."""
        self._client = CosmosClient.from_connection_string(self._connection_string)
        await self._client.__aenter__()

        # Get or create database
        try:
            self._database = self._client.get_database_client(self._database_name)
            # Verify database exists by reading it
            await self._database.read()
        except CosmosResourceNotFoundError:
            self._database = await self._client.create_database(self._database_name)
            logger.info(f"Created Cosmos DB database: {self._database_name}")

        # Get or create container
        try:
            self._container = self._database.get_container_client(self._container_name)
            # Verify container exists by reading it
            await self._container.read()
        except CosmosResourceNotFoundError:
            self._container = await self._database.create_container(
                id=self._container_name,
                partition_key=PartitionKey(path=self._partition_key_path),
                unique_key_policy={
                    "uniqueKeys": [{"paths": [path]} for path in self._unique_key_paths]
                },
            )
            logger.info(f"Created Cosmos DB container: {self._container_name}")

    async def close(self) -> None:
        """Close the Cosmos DB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._container = None

    async def __aenter__(self) -> "CosmosDBClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False

    def _require_container(self) -> ContainerProxy:
        if self._container is None:
            raise RuntimeError("CosmosDB client not connected. Call connect() first.")
        return self._container

    async def create_item(self, item: dict[str, Any]) -> dict[str, Any]:
        """Insert a new item into the container.

        Args:
            item: Dictionary containing the item data. Must include 'id' and
                  the partition key field.

        Returns:
            The created item with any system-generated fields.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceExistsError: If the id or a unique key already exists.
        """
        container = self._require_container()
        result = await container.create_item(body=item)
        return dict(result)

    async def replace_item(self, item_id: str, item: dict[str, Any]) -> dict[str, Any]:
        """Replace an existing item.

        Args:
            item_id: The item's id
            item: Full replacement body

        Returns:
            The replaced item.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceNotFoundError: If item not found.
            CosmosResourceExistsError: If a unique key already exists.
        """
        container = self._require_container()
        result = await container.replace_item(item=item_id, body=item)
        return dict(result)

    async def query_items(
        self,
        query: str,
        parameters: Optional[list[dict[str, Any]]] = None,
        partition_key: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Query items from the container.

        Args:
            query: SQL query string
            parameters: Optional query parameters as list of {"name": "@param", "value": value}
            partition_key: Optional partition key to scope the query

        Returns:
            List of matching items.

        Raises:
            RuntimeError: If client is not connected.
        """
        container = self._require_container()

        query_options = {}
        if partition_key is not None:
            query_options["partition_key"] = partition_key

        items = []
        async for item in container.query_items(
            query=query,
            parameters=parameters,
            **query_options,
        ):
            items.append(dict(item))

        return items

    async def read_item(self, item_id: str, partition_key: str) -> dict[str, Any]:
        """Read a single item by id and partition key.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceNotFoundError: If item not found.
        """
        container = self._require_container()
        result = await container.read_item(item=item_id, partition_key=partition_key)
        return dict(result)

    async def delete_item(self, item_id: str, partition_key: str) -> None:
        """Delete an item by id and partition key.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceNotFoundError: If item not found.
        """
        container = self._require_container()
        await container.delete_item(item=item_id, partition_key=partition_key)


# Process-wide connection handle, created on first use
_client: Optional[CosmosDBClient] = None
_client_lock = asyncio.Lock()


async def get_cosmos_client() -> CosmosDBClient:
    """
    Get the shared Cosmos DB client, connecting on first use.

    Concurrent first callers wait on the same lock, so only one connection
    attempt is made. A failed attempt leaves the handle unset and the next
    call tries again.

    Returns:
        Connected CosmosDBClient.

    Raises:
        ConfigurationError: If the connection string is not configured.
        AzureError: If the connection attempt fails.
    """
    global _client
    if _client is not None:
        return _client

    async with _client_lock:
        if _client is None:
            config = get_config()
            client = CosmosDBClient(
                connection_string=config.cosmosdb.connection_string,
                database_name=config.cosmosdb.database_name,
                container_name=config.cosmosdb.container_name,
            )
            try:
                await client.connect()
            except Exception:
                await client.close()
                raise
            logger.info(
                f"Connected to Cosmos DB container "
                f"{config.cosmosdb.database_name}/{config.cosmosdb.container_name}"
            )
            _client = client

    return _client


async def close_cosmos_client() -> None:
    """Close the shared client if it was opened."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None


def reset_cosmos_client() -> None:
    """Drop the shared client without closing it. Useful for testing."""
    global _client, _client_lock
    _client = None
    _client_lock = asyncio.Lock()
