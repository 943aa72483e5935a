"""
Error taxonomy for the document store and the content repository.

Read-path errors (not found, permission denied, unavailable) are absorbed by
the repository and replaced with default content. `StoreWriteError` is the
only error a caller of the repository ever sees.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for failures reported by a document store."""


class StoreNotFound(StoreError):
    """The addressed document or collection does not exist."""


class StorePermissionDenied(StoreError):
    """The store rejected the credentials or its access rules denied the call."""


class StoreUnavailable(StoreError):
    """Network or service failure, including timeouts."""


class StoreWriteError(Exception):
    """A write (set, update, delete or add) did not succeed. Never retried."""

    def __init__(self, operation: str, collection: str, doc_id: str | None = None):
        self.operation = operation
        self.collection = collection
        self.doc_id = doc_id
        target = f"{collection}/{doc_id}" if doc_id else collection
        super().__init__(f"{operation} failed for {target}")
