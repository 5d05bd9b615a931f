"""
kvlink Graph Storage
====================

Link store on FalkorDB (Redis protocol, Cypher-compatible).

Components:
- FalkorDBClient: async LinkStore on FalkorDB
- FalkorDBConfig: connection settings

Example:
    from kvlink.storage.graph import FalkorDBClient, FalkorDBConfig

    config = FalkorDBConfig(host="localhost", port=6380, graph_name="kvlink")
    client = FalkorDBClient(config)
    await client.connect()
"""

from kvlink.storage.graph.client import FalkorDBClient
from kvlink.storage.graph.config import FalkorDBConfig

__all__ = [
    "FalkorDBClient",
    "FalkorDBConfig",
]
