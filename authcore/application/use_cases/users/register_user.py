# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from authcore.domain.users.entities import User
from authcore.domain.users.exceptions import UserAlreadyExistsError
from authcore.domain.users.repositories import PasswordHasher, UserRepository
from authcore.shared.errors import MissingFieldsError
from authcore.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RegisterUserInput:
    username: str
    full_name: str
    password: str
    email: str

    def missing_fields(self) -> list[str]:
        fields = {
            "username": self.username,
            "fullName": self.full_name,
            "password": self.password,
            "email": self.email,
        }
        return [name for name, value in fields.items() if not value]


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, data: RegisterUserInput) -> User:
        missing = data.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

        # Fast path only; the unique constraint behind ``add`` is authoritative.
        # Store failures raise out of here and never fall through to the insert.
        if self._users.find_by_username(data.username) is not None:
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(data.password)
        user = User(
            id=0,
            username=data.username,
            full_name=data.full_name,
            email=data.email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        logger.debug(f"users.register: stored user_id={persisted.id}")
        return persisted
