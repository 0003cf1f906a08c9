# src/styleguide/services/passwords.py
"""Salted password hashing for backend accounts."""
from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from typing import Protocol, runtime_checkable

ALGORITHM = "pbkdf2-sha256"
SALT_BYTES = 16


@runtime_checkable
class PasswordHasher(Protocol):
    def get_hashed_password(self, password: str | bytes) -> str: ...
    def check_password(self, password: str | bytes, hashed: str) -> bool: ...


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def _unb64(value: str) -> bytes:
    return base64.b64decode(value + "=" * (-len(value) % 4), validate=True)


def _to_bytes(password: str | bytes) -> bytes:
    return password.encode("utf-8") if isinstance(password, str) else bytes(password)


class SaltedPasswordHasher:
    """
    PBKDF2-SHA256 with a fresh random salt per hash.

    Format: ``$pbkdf2-sha256$<iterations>$<salt>$<digest>`` (base64, no padding).
    """

    def __init__(self, iterations: int = 100_000) -> None:
        self.iterations = iterations

    def get_hashed_password(self, password: str | bytes) -> str:
        salt = secrets.token_bytes(SALT_BYTES)
        digest = hashlib.pbkdf2_hmac("sha256", _to_bytes(password), salt, self.iterations)
        return f"${ALGORITHM}${self.iterations}${_b64(salt)}${_b64(digest)}"

    def check_password(self, password: str | bytes, hashed: str) -> bool:
        try:
            _, algorithm, raw_iterations, raw_salt, raw_digest = hashed.split("$")
            iterations = int(raw_iterations)
            salt, digest = _unb64(raw_salt), _unb64(raw_digest)
        except ValueError:
            # malformed hash
            return False
        if algorithm != ALGORITHM or iterations < 1:
            return False
        candidate = hashlib.pbkdf2_hmac("sha256", _to_bytes(password), salt, iterations)
        return hmac.compare_digest(candidate, digest)


def generate_random_bytes(length: int = 10) -> bytes:
    return secrets.token_bytes(length)
