"""
kvlink Engine
=============

- AssociationIndexer: store-independent indexing capability
- LinkAssociationIndexer: implementation over a LinkStore
"""

from kvlink.engine.indexer import AssociationIndexer
from kvlink.engine.link_indexer import LinkAssociationIndexer

__all__ = [
    "AssociationIndexer",
    "LinkAssociationIndexer",
]
