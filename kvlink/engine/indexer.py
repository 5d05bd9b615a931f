"""
Association Indexer
===================

Capability the host mapping layer depends on to index associations,
independent of the backing store.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Union

from kvlink.mapping.model import PersistentEntity

ForeignKeys = Union[str, Iterable[str]]


class AssociationIndexer(ABC):
    """
    Indexes owner -> child associations and answers which children an owner
    has.

    ``foreign_keys`` may be a single key or any iterable of keys; a single key
    behaves exactly like a one-element list.
    """

    @abstractmethod
    async def index(self, primary_key: str, foreign_keys: ForeignKeys) -> None:
        """Record that each foreign key belongs to primary_key."""

    @abstractmethod
    async def unindex(self, primary_key: str, foreign_keys: ForeignKeys) -> None:
        """Remove associations previously recorded by index()."""

    @abstractmethod
    async def query(self, primary_key: str) -> List[str]:
        """Return the foreign keys associated with primary_key."""

    @abstractmethod
    def get_indexed_entity(self) -> PersistentEntity:
        """Entity whose keys this indexer stores."""
