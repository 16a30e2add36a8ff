from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.users.models import Address


class AddressRepositoryProtocol(Protocol):
    def create(self, **data) -> "Address": ...

    def get(self, **filters) -> Optional["Address"]: ...

    def list_for_user(self, user_id: int) -> Iterable["Address"]: ...

    def list_ordered(self, ordering: str) -> Iterable["Address"]: ...

    def delete(self, address: "Address") -> None: ...
