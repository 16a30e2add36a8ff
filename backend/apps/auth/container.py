from __future__ import annotations

from .repositories import UserRegistrationRepository
from .services import RegistrationService, SessionService


def build_registration_service() -> RegistrationService:
    return RegistrationService(users=UserRegistrationRepository())


def build_session_service() -> SessionService:
    return SessionService()
