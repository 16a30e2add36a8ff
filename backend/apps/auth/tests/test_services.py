import unittest
from types import SimpleNamespace
from unittest.mock import Mock, patch

from rest_framework_simplejwt.exceptions import TokenError

from apps.api.exceptions import ApplicationError
from apps.auth.services import RegistrationService, SessionService


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class FakeUserRepository:
    def __init__(self):
        self.users = {}

    def username_exists(self, username: str) -> bool:
        return any(u.username.lower() == username.lower() for u in self.users.values())

    def email_exists(self, email: str) -> bool:
        return any(u.email.lower() == email.lower() for u in self.users.values())

    def create_user(self, **data):
        data.pop("password")
        user = SimpleNamespace(
            id=len(self.users) + 1,
            is_staff=False,
            addresses=SimpleNamespace(all=lambda: []),
            **data,
        )
        self.users[user.id] = user
        return user

    def get(self, **filters):
        return self.users.get(filters.get("id"))


PAYLOAD = {
    "username": "shopper",
    "email": "Shopper@Example.com",
    "password": "Secret#123",
    "first_name": "Sam",
    "last_name": "Shopper",
}


class RegistrationServiceTests(unittest.TestCase):
    def setUp(self):
        self.repo = FakeUserRepository()
        self.service = RegistrationService(users=self.repo)
        patcher = patch("apps.auth.services.transaction.atomic", DummyAtomic())
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_register_success_normalizes_email(self):
        dto = self.service.register(dict(PAYLOAD))
        self.assertEqual(dto.username, "shopper")
        self.assertEqual(dto.email, "shopper@example.com")
        self.assertEqual(dto.addresses, [])

    def test_register_duplicate_username(self):
        self.service.register(dict(PAYLOAD))
        with self.assertRaises(ApplicationError) as ctx:
            self.service.register(dict(PAYLOAD, email="other@example.com"))
        self.assertEqual(ctx.exception.message, "Username already exists")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_register_duplicate_email(self):
        self.service.register(dict(PAYLOAD))
        with self.assertRaises(ApplicationError) as ctx:
            self.service.register(dict(PAYLOAD, username="shopper2"))
        self.assertEqual(ctx.exception.details, {"email": "shopper@example.com"})

    def test_profile_missing_user(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.profile(99)
        self.assertEqual(ctx.exception.code, "NOT_FOUND")


class SessionServiceTests(unittest.TestCase):
    def test_logout_blacklists_token(self):
        token = Mock()
        factory = Mock(return_value=token)
        SessionService(token_factory=factory).logout("raw", actor_id=1)
        factory.assert_called_once_with("raw")
        token.blacklist.assert_called_once()

    def test_logout_requires_token(self):
        with self.assertRaises(ApplicationError):
            SessionService(token_factory=Mock()).logout("", actor_id=1)

    def test_logout_invalid_token(self):
        factory = Mock(side_effect=TokenError("Token is invalid or expired"))
        with self.assertRaises(ApplicationError) as ctx:
            SessionService(token_factory=factory).logout("bad", actor_id=1)
        self.assertEqual(ctx.exception.code, "VALIDATION_ERROR")
