from __future__ import annotations

from typing import Any, Dict, Optional

from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from apps.users.dtos import UserDTO, user_to_dto
from .protocols import RefreshTokenFactoryProtocol, UserRegistrationRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", layer="service")


class RegistrationService:
    def __init__(self, users: UserRegistrationRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="RegistrationService")

    def _ensure_unique(self, username: str, email: str) -> None:
        if self.users.username_exists(username):
            self.logger.info("Registration rejected: username taken", username=username)
            raise ApplicationError(
                "VALIDATION_ERROR", "Username already exists", details={"username": username}
            )
        if self.users.email_exists(email):
            self.logger.info("Registration rejected: email taken", email=email)
            raise ApplicationError(
                "VALIDATION_ERROR", "Email already exists", details={"email": email}
            )

    def register(self, data: Dict[str, Any]) -> UserDTO:
        username = data["username"].strip()
        email = data["email"].strip().lower()
        self._ensure_unique(username, email)
        with transaction.atomic():
            user = self.users.create_user(
                username=username,
                email=email,
                password=data["password"],
                first_name=data.get("first_name", "").strip(),
                last_name=data.get("last_name", "").strip(),
                phone=data.get("phone") or None,
            )
        self.logger.info("User registered", user_id=user.id, username=username)
        return user_to_dto(user)

    def profile(self, user_id: int) -> UserDTO:
        user = self.users.get(id=user_id)
        if user is None:
            raise ApplicationError("NOT_FOUND", "User not found", details={"id": str(user_id)})
        return user_to_dto(user)


class SessionService:
    def __init__(self, token_factory: RefreshTokenFactoryProtocol = RefreshToken):
        self.token_factory = token_factory
        self.logger = logger.bind(service="SessionService")

    def logout(self, refresh_token: Optional[str], actor_id: Optional[int]) -> None:
        """Blacklist the refresh token so it can no longer mint access tokens."""
        if not refresh_token:
            self.logger.warning("Logout rejected: missing refresh token", actor_id=actor_id)
            raise ApplicationError("VALIDATION_ERROR", "Invalid token", details={"refresh": None})
        try:
            self.token_factory(refresh_token).blacklist()
        except TokenError as exc:
            self.logger.warning("Logout rejected: token error", actor_id=actor_id, error=str(exc))
            raise ApplicationError(
                "VALIDATION_ERROR", "Invalid token", details={"refresh": str(exc)}
            ) from exc
        self.logger.info("User logged out", actor_id=actor_id)
