"""In-memory link store for development and tests."""

import threading
from typing import Dict, List, Optional, Set, Tuple

import structlog

from kvlink.storage.base import LinkStore

log = structlog.get_logger()

# (owner_bucket, owner_key, tag) -> {(child_bucket, child_key)}
_LinkIndex = Dict[Tuple[str, str, str], Set[Tuple[str, str]]]


class InMemoryLinkStore(LinkStore):
    """
    Process-local LinkStore.

    Links are kept in a reverse index keyed by owner and tag, which is the
    shape link walks need.

    Example:
        store = InMemoryLinkStore()
        await store.link("order", "ord-1", "customer", "cust-42", "orders")
        await store.links_to("customer", "cust-42", "orders")  # ["ord-1"]
    """

    def __init__(self):
        self._links: _LinkIndex = {}
        self._lock = threading.Lock()

    async def link(self, child_bucket, child_key, owner_bucket, owner_key, tag) -> None:
        with self._lock:
            self._links.setdefault((owner_bucket, owner_key, tag), set()).add(
                (child_bucket, child_key)
            )
        log.debug(
            "Link stored",
            child=f"{child_bucket}/{child_key}",
            owner=f"{owner_bucket}/{owner_key}",
            tag=tag,
        )

    async def links_to(
        self,
        owner_bucket: str,
        owner_key: str,
        tag: str,
        child_bucket: Optional[str] = None,
    ) -> List[str]:
        with self._lock:
            children = list(self._links.get((owner_bucket, owner_key, tag), ()))

        return [
            key for bucket, key in children
            if child_bucket is None or bucket == child_bucket
        ]

    async def unlink(self, child_bucket, child_key, owner_bucket, owner_key, tag) -> bool:
        index_key = (owner_bucket, owner_key, tag)
        with self._lock:
            children = self._links.get(index_key)
            if not children or (child_bucket, child_key) not in children:
                return False
            children.discard((child_bucket, child_key))
            if not children:
                del self._links[index_key]
        return True

    async def health_check(self) -> bool:
        return True

    def link_count(self) -> int:
        with self._lock:
            return sum(len(children) for children in self._links.values())
