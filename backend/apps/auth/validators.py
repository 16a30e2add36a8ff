import re
import string

from rest_framework import serializers

USERNAME_MIN_LENGTH = 4
PASSWORD_MIN_LENGTH = 6

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")

# (predicate, message) pairs checked in order; the first failure is reported
PASSWORD_RULES = (
    (lambda p: len(p) >= PASSWORD_MIN_LENGTH, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."),
    (lambda p: any(ch.isupper() for ch in p), "Password must include at least one uppercase letter."),
    (lambda p: any(ch.islower() for ch in p), "Password must include at least one lowercase letter."),
    (lambda p: any(ch.isdigit() for ch in p), "Password must include at least one number."),
    (lambda p: any(ch in string.punctuation for ch in p), "Password must include at least one special character."),
)


def validate_username(value: str) -> str:
    """Usernames are trimmed, alphanumeric and at least four characters."""
    username = (value or "").strip()
    if len(username) < USERNAME_MIN_LENGTH:
        raise serializers.ValidationError(
            f"Username must be at least {USERNAME_MIN_LENGTH} characters long."
        )
    if not _ALPHANUMERIC.match(username):
        raise serializers.ValidationError("Username may contain only letters and numbers.")
    return username


def validate_password(value: str) -> str:
    password = value or ""
    for check, message in PASSWORD_RULES:
        if not check(password):
            raise serializers.ValidationError(message)
    return password
