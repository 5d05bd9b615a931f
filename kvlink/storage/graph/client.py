"""
FalkorDB Client
===============

Async link store backed by the FalkorDB graph database.

FalkorDB runs on the Redis protocol and supports Cypher queries. Records are
stored as ``(:Record {bucket, key})`` nodes and links as
``[:LINK {tag}]`` edges pointing from child to owner, so a link walk is a
single incoming-edge match on the owner node.
"""

import structlog
import asyncio
from typing import Dict, List, Any, Optional

from falkordb import FalkorDB, Graph
from redis.exceptions import RedisError, ResponseError

from kvlink.exceptions import StoreCommunicationError
from kvlink.storage.base import LinkStore
from kvlink.storage.graph.config import FalkorDBConfig

log = structlog.get_logger()


LINK_CYPHER = """
    MERGE (c:Record {bucket: $child_bucket, key: $child_key})
    MERGE (o:Record {bucket: $owner_bucket, key: $owner_key})
    MERGE (c)-[:LINK {tag: $tag}]->(o)
"""

LINKS_TO_CYPHER = """
    MATCH (c:Record)-[:LINK {tag: $tag}]->(o:Record {bucket: $owner_bucket, key: $owner_key})
    WHERE $child_bucket IS NULL OR c.bucket = $child_bucket
    RETURN DISTINCT c.key AS key
"""

UNLINK_CYPHER = """
    MATCH (c:Record {bucket: $child_bucket, key: $child_key})-[l:LINK {tag: $tag}]->(o:Record {bucket: $owner_bucket, key: $owner_key})
    DELETE l
    RETURN count(*) AS removed
"""


class FalkorDBClient(LinkStore):
    """
    Async FalkorDB client implementing LinkStore.

    Example:
        client = FalkorDBClient(config)
        await client.connect()

        await client.link("order", "ord-1", "customer", "cust-42", "orders")
        keys = await client.links_to("customer", "cust-42", "orders")

        await client.close()
    """

    def __init__(self, config: Optional[FalkorDBConfig] = None):
        self.config = config or FalkorDBConfig()
        self._db: Optional[FalkorDB] = None
        self._graph: Optional[Graph] = None
        self._connected = False

        log.info(
            "FalkorDBClient initialized",
            host=f"{self.config.host}:{self.config.port}",
            graph=self.config.graph_name,
        )

    async def connect(self):
        """Establish connection to FalkorDB."""
        if self._connected:
            log.debug("Already connected to FalkorDB")
            return

        # falkordb-py is synchronous
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, self._connect_sync)

        log.info(f"Connected to FalkorDB at {self.config.host}:{self.config.port}")

    def _connect_sync(self):
        self._db = FalkorDB(
            host=self.config.host,
            port=self.config.port,
            password=self.config.password,
            socket_timeout=self.config.timeout_ms / 1000,
        )
        self._graph = self._db.select_graph(self.config.graph_name)
        self._connected = True

    async def close(self):
        """Close connection."""
        if not self._connected:
            return

        # Connections belong to the redis pool; drop our references
        self._connected = False
        self._db = None
        self._graph = None
        log.info("Disconnected from FalkorDB")

    async def query(
        self,
        cypher: str,
        params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Execute a Cypher query.

        Returns:
            List of result records as dicts

        Raises:
            RuntimeError: if connect() was not called
            StoreCommunicationError: if FalkorDB rejects or drops the query
        """
        return await self._run(cypher, params or {}, operation="query")

    async def _run(
        self,
        cypher: str,
        params: Dict[str, Any],
        operation: str,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        if not self._connected:
            raise RuntimeError("Not connected to FalkorDB. Call connect() first.")

        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, self._query_sync, cypher, params)
        except RedisError as e:
            log.error(
                "FalkorDB operation failed",
                operation=operation,
                bucket=bucket,
                key=key,
                error=str(e),
            )
            target = f" on {bucket}/{key}" if bucket is not None or key is not None else ""
            raise StoreCommunicationError(
                f"{operation} failed{target}: {e}",
                operation=operation,
                bucket=bucket,
                key=key,
            ) from e

    def _query_sync(self, cypher: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        result = self._graph.query(cypher, params)

        records = []
        if result.result_set:
            headers = result.header

            for row in result.result_set:
                record = {}
                for i, header in enumerate(headers):
                    # header format is [type, alias]
                    col_name = header[1] if len(header) > 1 else f"col_{i}"
                    record[col_name] = row[i]
                records.append(record)

        log.debug(
            f"Query executed: {cypher.strip()[:80]}... "
            f"(params={list(params.keys())}) -> {len(records)} records"
        )
        return records

    async def ensure_indexes(self):
        """Create the Record(bucket, key) index used by link lookups."""
        try:
            await self._run(
                "CREATE INDEX FOR (r:Record) ON (r.bucket, r.key)",
                {},
                operation="ensure_indexes",
            )
        except StoreCommunicationError as e:
            if not isinstance(e.__cause__, ResponseError) or "already indexed" not in str(e.__cause__):
                raise
            log.debug("Record index already exists", graph=self.config.graph_name)

    async def link(self, child_bucket, child_key, owner_bucket, owner_key, tag) -> None:
        await self._run(
            LINK_CYPHER,
            {
                "child_bucket": child_bucket,
                "child_key": child_key,
                "owner_bucket": owner_bucket,
                "owner_key": owner_key,
                "tag": tag,
            },
            operation="link",
            bucket=child_bucket,
            key=child_key,
        )

    async def links_to(
        self,
        owner_bucket: str,
        owner_key: str,
        tag: str,
        child_bucket: Optional[str] = None,
    ) -> List[str]:
        records = await self._run(
            LINKS_TO_CYPHER,
            {
                "owner_bucket": owner_bucket,
                "owner_key": owner_key,
                "tag": tag,
                "child_bucket": child_bucket,
            },
            operation="links_to",
            bucket=owner_bucket,
            key=owner_key,
        )
        return [record["key"] for record in records]

    async def unlink(self, child_bucket, child_key, owner_bucket, owner_key, tag) -> bool:
        records = await self._run(
            UNLINK_CYPHER,
            {
                "child_bucket": child_bucket,
                "child_key": child_key,
                "owner_bucket": owner_bucket,
                "owner_key": owner_key,
                "tag": tag,
            },
            operation="unlink",
            bucket=child_bucket,
            key=child_key,
        )
        return bool(records and records[0].get("removed"))

    async def health_check(self) -> bool:
        """
        Check if FalkorDB is healthy and reachable.

        Returns:
            True if healthy, False otherwise
        """
        try:
            if not self._connected:
                await self.connect()

            await self.query("RETURN 1")
            return True

        except (RedisError, StoreCommunicationError) as e:
            log.error(f"Health check failed: {e}")
            return False
