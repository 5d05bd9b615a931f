"""
FalkorDB Configuration
======================

Configuration for the FalkorDB link store client.

Supports configuration via environment variables for flexible deploys.

Usage:
    from kvlink.storage.graph import FalkorDBConfig

    # Default (env vars or default values)
    config = FalkorDBConfig()

    # Explicit override
    config = FalkorDBConfig(host="localhost", port=6380, graph_name="kvlink_prod")

Environment Variables:
    KVLINK_FALKORDB_HOST: Server host (default: localhost)
    KVLINK_FALKORDB_PORT: Server port (default: 6380)
    KVLINK_FALKORDB_GRAPH: Graph name (default: kvlink_dev)
    KVLINK_FALKORDB_PASSWORD: Password (default: empty)
    KVLINK_FALKORDB_TIMEOUT_MS: Operation timeout in ms (default: 5000)
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _get_env_str(key: str, default: str) -> str:
    return os.environ.get(key, default)


def _get_env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


@dataclass
class FalkorDBConfig:
    """
    FalkorDB connection settings.

    Attributes:
        host: FalkorDB server host
        port: Server port (6380 for the FalkorDB container)
        graph_name: Graph holding link records
        timeout_ms: Socket timeout in milliseconds
        password: Auth password (optional)
    """
    host: str = field(default_factory=lambda: _get_env_str("KVLINK_FALKORDB_HOST", "localhost"))
    port: int = field(default_factory=lambda: _get_env_int("KVLINK_FALKORDB_PORT", 6380))
    graph_name: str = field(default_factory=lambda: _get_env_str("KVLINK_FALKORDB_GRAPH", "kvlink_dev"))
    timeout_ms: int = field(default_factory=lambda: _get_env_int("KVLINK_FALKORDB_TIMEOUT_MS", 5000))
    password: Optional[str] = field(default_factory=lambda: _get_env_str("KVLINK_FALKORDB_PASSWORD", "") or None)
