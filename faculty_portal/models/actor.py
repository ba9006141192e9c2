"""The party a listing or moderation call is made for."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .event import FACULTY, DEPARTMENT, SOURCE_KINDS

ADMIN = 'admin'


@dataclass(frozen=True)
class Actor:
    """
    Caller of a listing or moderation operation.

    An admin sees every source kind; a faculty member or a department only
    sees the events it owns, identified by ``owner_id`` (the owner's row id).
    """
    role: str
    owner_id: Optional[int] = None

    @classmethod
    def admin(cls) -> 'Actor':
        return cls(ADMIN)

    @classmethod
    def faculty(cls, owner_id: int) -> 'Actor':
        return cls(FACULTY, owner_id)

    @classmethod
    def department(cls, owner_id: int) -> 'Actor':
        return cls(DEPARTMENT, owner_id)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    @property
    def source_kinds(self) -> Tuple[str, ...]:
        """Source kinds whose events this actor may see."""
        return SOURCE_KINDS if self.is_admin else (self.role,)

    def owner_filter(self, owner_key: str) -> Optional[Dict[str, int]]:
        """Equality filter restricting a query to this actor's rows (None for admins)."""
        if self.is_admin:
            return None
        return {owner_key: self.owner_id}
