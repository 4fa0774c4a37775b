"""
Caller identity and authorization guards shared by all handlers.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.errors import PermissionDenied, Unauthenticated
from src.registry.admin_roles import ADMIN_CLAIM


@dataclass
class Caller:
    """The authenticated user behind a callable request."""
    uid: str
    token: dict = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.token.get(ADMIN_CLAIM) is True

    @classmethod
    def from_auth(cls, auth_data) -> Optional["Caller"]:
        """Build from firebase_functions AuthData (None when unauthenticated)."""
        if auth_data is None:
            return None
        return cls(uid=auth_data.uid, token=dict(auth_data.token or {}))


def require_caller(caller: Optional[Caller], message: str = "Authentication required.") -> Caller:
    if caller is None:
        raise Unauthenticated(message)
    return caller


def require_admin_claim(caller: Optional[Caller], message: str) -> Caller:
    """Admin check on the caller's token; anonymous callers fail the same way."""
    if caller is None or not caller.is_admin:
        raise PermissionDenied(message)
    return caller
