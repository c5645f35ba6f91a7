"""
Gateway Contracts
=================

Interfaces over the three remote capabilities the admin core consumes:
structured records, binary object storage, and session/role lookup.
All operations are coroutines.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple


OrderBy = Sequence[Tuple[str, bool]]


class DataGateway(ABC):
    """Per-collection record store."""

    @abstractmethod
    async def list(self, collection: str, order_by: Optional[OrderBy] = None,
                   filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Ordered records; raises TransientFetchError on failure. Empty is valid."""

    @abstractmethod
    async def get_singleton(self, collection: str) -> Optional[Dict[str, Any]]:
        """The single row of *collection*, or None when there are no rows."""

    @abstractmethod
    async def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Store *record* and return it with its assigned id; raises ValidationError."""

    @abstractmethod
    async def update(self, collection: str, record_id: str, fields: Dict[str, Any]) -> None:
        """Update *fields* of one record; raises NotFoundError for an unknown id."""

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> None:
        """Delete one record; raises NotFoundError for an unknown id."""


class StorageGateway(ABC):
    """Binary object store for uploaded images."""

    @abstractmethod
    async def upload(self, namespace: str, filename: str, data: bytes) -> str:
        """Store *data* as namespace/filename and return the stored path; raises UploadError."""

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Public URL for a stored path."""


class Session:
    """An authenticated caller."""

    def __init__(self, user_id: str, email: Optional[str] = None):
        self.user_id = user_id
        self.email = email

    def __repr__(self):
        return f"Session(user_id={self.user_id!r}, email={self.email!r})"


class AuthGateway(ABC):
    """Session retrieval, sign-out and role lookup."""

    @abstractmethod
    async def get_session(self) -> Optional[Session]:
        """Current session or None."""

    @abstractmethod
    async def sign_out(self) -> None:
        """Invalidate the current session."""

    @abstractmethod
    async def has_role(self, user_id: str, role: str) -> bool:
        """Whether a role-assignment record exists for (user_id, role)."""
