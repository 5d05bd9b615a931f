"""
Mapping Metadata
================

Read-only entity and association descriptors handed to indexers by the
mapping layer.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PersistentEntity:
    """
    An entity type known to the mapping layer.

    Attributes:
        name: Entity name (e.g. "customer")
        bucket: Store bucket for records of this entity. Defaults to name.
    """
    name: str
    bucket: Optional[str] = None

    @property
    def bucket_name(self) -> str:
        return self.bucket or self.name


@dataclass(frozen=True)
class Association:
    """
    Directed, named relationship owner -> associated entity.

    The name doubles as the link tag in the store.

    Example:
        >>> customer = PersistentEntity("customer")
        >>> order = PersistentEntity("order")
        >>> orders = Association("orders", owner=customer, associated_entity=order)
    """
    name: str
    owner: Optional[PersistentEntity]
    associated_entity: Optional[PersistentEntity]

    def __post_init__(self):
        if not self.name:
            raise ValueError("Association name must not be empty")
