from __future__ import annotations

from typing import Any, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.users.models import User


class UserRegistrationRepositoryProtocol(Protocol):
    def username_exists(self, username: str) -> bool: ...

    def email_exists(self, email: str) -> bool: ...

    def create_user(self, **data: Any) -> "User": ...

    def get(self, **filters) -> Optional["User"]: ...


class RefreshTokenFactoryProtocol(Protocol):
    def __call__(self, raw_token: str) -> Any: ...
