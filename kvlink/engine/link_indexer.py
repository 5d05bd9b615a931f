"""
Link Association Indexer
========================

AssociationIndexer that stores each association as a store-level link from
the child record to the owner record, tagged with the association name.

Flow:
    index("cust-42", ["ord-1", "ord-2"])
        -> link(order/ord-1 -> customer/cust-42, tag="orders")
        -> link(order/ord-2 -> customer/cust-42, tag="orders")

    query("cust-42")
        -> links_to(customer/cust-42, tag="orders", child_bucket="order")

The store is the source of truth: no local index is kept.
"""

import structlog
from typing import Iterable, List, Optional

from kvlink.engine.indexer import AssociationIndexer, ForeignKeys
from kvlink.mapping.conversion import ConversionService
from kvlink.mapping.model import Association, PersistentEntity
from kvlink.storage.base import LinkStore

log = structlog.get_logger()


class LinkAssociationIndexer(AssociationIndexer):
    """
    Indexes an association through store links.

    Writes are sequential and fail-fast: the first StoreCommunicationError
    propagates unchanged, later keys are not attempted and earlier writes
    stay in place.

    Example:
        >>> customer = PersistentEntity("customer")
        >>> order = PersistentEntity("order")
        >>> indexer = LinkAssociationIndexer(
        ...     store, ConversionService(), Association("orders", customer, order)
        ... )
        >>> await indexer.index("cust-42", ["ord-1", "ord-2"])
        >>> sorted(await indexer.query("cust-42"))
        ['ord-1', 'ord-2']
    """

    def __init__(
        self,
        store: LinkStore,
        conversion_service: Optional[ConversionService],
        association: Association,
    ):
        if association is None:
            raise ValueError("association is required")
        if association.owner is None or association.associated_entity is None:
            raise ValueError(
                f"Association '{association.name}' needs both owner and associated entity"
            )

        self.store = store
        self.conversion_service = conversion_service or ConversionService()
        self.association = association
        self.owner = association.owner
        self.child = association.associated_entity

    def _keys(self, foreign_keys: ForeignKeys) -> Iterable:
        # str and bytes are single keys, not iterables of characters
        if isinstance(foreign_keys, (str, bytes)) or not isinstance(foreign_keys, Iterable):
            return [foreign_keys]
        return foreign_keys

    def _to_key(self, value) -> str:
        return self.conversion_service.convert(value)

    async def index(self, primary_key, foreign_keys: ForeignKeys) -> None:
        owner_key = self._to_key(primary_key)
        for foreign_key in self._keys(foreign_keys):
            await self._link(self._to_key(foreign_key), owner_key)

    async def _link(self, child_key: str, owner_key: str) -> None:
        log.debug(
            "Indexing association",
            association=self.association.name,
            child=f"{self.child.bucket_name}/{child_key}",
            owner=f"{self.owner.bucket_name}/{owner_key}",
        )
        await self.store.link(
            self.child.bucket_name,
            child_key,
            self.owner.bucket_name,
            owner_key,
            self.association.name,
        )

    async def unindex(self, primary_key, foreign_keys: ForeignKeys) -> None:
        owner_key = self._to_key(primary_key)
        for foreign_key in self._keys(foreign_keys):
            child_key = self._to_key(foreign_key)
            removed = await self.store.unlink(
                self.child.bucket_name,
                child_key,
                self.owner.bucket_name,
                owner_key,
                self.association.name,
            )
            if not removed:
                log.debug(
                    "No link to remove",
                    association=self.association.name,
                    child=f"{self.child.bucket_name}/{child_key}",
                    owner=f"{self.owner.bucket_name}/{owner_key}",
                )

    async def query(self, primary_key) -> List[str]:
        owner_key = self._to_key(primary_key)
        keys = await self.store.links_to(
            self.owner.bucket_name,
            owner_key,
            self.association.name,
            child_bucket=self.child.bucket_name,
        )
        # Stores may return a child once per duplicate edge
        result = list(dict.fromkeys(keys))

        log.debug(
            "Association queried",
            association=self.association.name,
            owner=f"{self.owner.bucket_name}/{owner_key}",
            count=len(result),
        )
        return result

    def get_indexed_entity(self) -> PersistentEntity:
        return self.association.associated_entity
