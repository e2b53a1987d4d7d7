from __future__ import annotations

from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.users.models import User


class UserRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["User"]: ...

    def username_exists(self, username: str) -> bool: ...

    def email_exists(self, email: str) -> bool: ...

    def create_user(self, *, password: str, **data) -> "User": ...
