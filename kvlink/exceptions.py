"""
kvlink Exceptions
=================

Errors raised by link stores and propagated unchanged by indexers.
"""

from typing import Optional


class KvlinkError(Exception):
    """Base class for kvlink errors."""


class StoreCommunicationError(KvlinkError):
    """
    A link write or link walk could not be completed by the store.

    Attributes:
        operation: Store operation that failed ("link", "links_to", ...)
        bucket: Bucket of the record involved, if known
        key: Key of the record involved, if known
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.bucket = bucket
        self.key = key
