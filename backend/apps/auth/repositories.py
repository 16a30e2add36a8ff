from __future__ import annotations

from apps.users.repositories import UserRepository


class UserRegistrationRepository(UserRepository):
    def username_exists(self, username: str) -> bool:
        return self.model.objects.filter(username__iexact=username).exists()

    def email_exists(self, email: str) -> bool:
        return self.model.objects.filter(email__iexact=email).exists()