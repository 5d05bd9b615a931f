"""
Storage Layer
=============

Link stores the association indexers write to.

- base: LinkStore interface (link, links_to, unlink, health_check)
- graph/: FalkorDB-backed store for deployments
- memory: in-process store for development and tests
"""

from kvlink.storage.base import LinkStore
from kvlink.storage.memory import InMemoryLinkStore
from kvlink.storage.graph import FalkorDBClient, FalkorDBConfig

__all__ = [
    "LinkStore",
    "InMemoryLinkStore",
    "FalkorDBClient",
    "FalkorDBConfig",
]
