from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Principal:
    """The authenticated identity a request acts on behalf of."""

    user_id: int
    username: str = ""

    @classmethod
    def from_user(cls, user: Any) -> "Principal":
        return cls(user_id=int(user.id), username=getattr(user, "username", "") or "")


def principal_from_request(request: Any) -> Optional[Principal]:
    """Return the principal attached by the validation middleware, falling back to request.user."""
    principal = getattr(request, "principal", None)
    if isinstance(principal, Principal):
        return principal
    user = getattr(request, "user", None)
    if user is not None and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return Principal.from_user(user)
    return None
