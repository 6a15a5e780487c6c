"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from authcore.domain.users.repositories import PasswordHasher
from authcore.shared.errors import PasswordHashingError


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted hashes in werkzeug's ``method$salt$hash`` format.

    ``method`` carries the work factor (``scrypt:n:r:p`` or
    ``pbkdf2:sha256:iterations``). Verification parses it back out of the
    stored value, so raising the configured cost keeps older hashes valid.
    """

    def __init__(self, method: str = "scrypt:32768:8:1", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length
        # Fail at startup rather than on the first registration.
        self.hash("probe")

    @property
    def method(self) -> str:
        return self._method

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (ValueError, TypeError) as exc:
            raise PasswordHashingError() from exc

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed or "$" not in hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError, OverflowError):
            return False
