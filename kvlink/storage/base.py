"""
Link Store Port
===============

Interface every link-capable key/value store client implements.

A link is a directed edge from a child record to an owner record, both
addressed by (bucket, key), carrying a single tag. Link walking returns the
keys of records linked *to* a given record under a tag.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class LinkStore(ABC):
    """Store client with link and link-walk support."""

    @abstractmethod
    async def link(
        self,
        child_bucket: str,
        child_key: str,
        owner_bucket: str,
        owner_key: str,
        tag: str,
    ) -> None:
        """
        Record a tagged link child -> owner. Re-adding an existing link is a
        no-op.

        Raises:
            StoreCommunicationError: if the write cannot be completed
        """

    @abstractmethod
    async def links_to(
        self,
        owner_bucket: str,
        owner_key: str,
        tag: str,
        child_bucket: Optional[str] = None,
    ) -> List[str]:
        """
        Walk links pointing at (owner_bucket, owner_key) tagged with tag.

        Args:
            child_bucket: Restrict results to children in this bucket

        Returns:
            Child keys, order not guaranteed

        Raises:
            StoreCommunicationError: if the walk cannot be completed
        """

    @abstractmethod
    async def unlink(
        self,
        child_bucket: str,
        child_key: str,
        owner_bucket: str,
        owner_key: str,
        tag: str,
    ) -> bool:
        """Remove a link. Returns True if a link was removed."""

    @abstractmethod
    async def health_check(self) -> bool:
        """True if the store is reachable."""
