# travelcrm/infra/security/password_hasher.py
from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from travelcrm.services._shared.ports import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted password hashing backed by ``werkzeug.security``."""

    def __init__(self, method: str = "pbkdf2:sha256", salt_length: int = 16) -> None:
        self.method = method
        self.salt_length = salt_length

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self.method, salt_length=self.salt_length)

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return check_password_hash(hashed, password)
