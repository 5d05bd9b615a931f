"""
kvlink: association indexing on link-walking key/value stores
=============================================================

Records owner -> child associations as tagged links from the child record
to the owner record, and answers association queries with link walks.

Quick Start:
    from kvlink import (
        Association, PersistentEntity, LinkAssociationIndexer, FalkorDBClient,
    )

    store = FalkorDBClient()
    await store.connect()

    orders = Association(
        "orders", PersistentEntity("customer"), PersistentEntity("order")
    )
    indexer = LinkAssociationIndexer(store, None, orders)

    await indexer.index("cust-42", ["ord-1", "ord-2"])
    await indexer.query("cust-42")  # ["ord-1", "ord-2"]

Components:
- mapping: PersistentEntity, Association, ConversionService
- engine: AssociationIndexer, LinkAssociationIndexer
- storage: LinkStore, FalkorDBClient, InMemoryLinkStore
"""

__version__ = "0.1.0"
__author__ = "kvlink Team"

from kvlink.exceptions import KvlinkError, StoreCommunicationError
from kvlink.mapping import PersistentEntity, Association, ConversionService
from kvlink.engine import AssociationIndexer, LinkAssociationIndexer
from kvlink.storage import LinkStore, InMemoryLinkStore, FalkorDBClient, FalkorDBConfig

__all__ = [
    # Errors
    "KvlinkError",
    "StoreCommunicationError",
    # Mapping
    "PersistentEntity",
    "Association",
    "ConversionService",
    # Engine
    "AssociationIndexer",
    "LinkAssociationIndexer",
    # Storage
    "LinkStore",
    "InMemoryLinkStore",
    "FalkorDBClient",
    "FalkorDBConfig",
]
