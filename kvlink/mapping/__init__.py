"""
kvlink Mapping Metadata
=======================

- PersistentEntity: entity type and its bucket
- Association: named owner -> child relationship
- ConversionService: key coercion
"""

from kvlink.mapping.model import PersistentEntity, Association
from kvlink.mapping.conversion import ConversionService

__all__ = [
    "PersistentEntity",
    "Association",
    "ConversionService",
]
