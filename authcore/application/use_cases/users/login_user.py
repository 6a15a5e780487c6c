# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from authcore.domain.users.entities import SessionToken, User
from authcore.domain.users.exceptions import InvalidCredentialsError
from authcore.domain.users.repositories import (
    PasswordHasher,
    SessionTokenRepository,
    UserRepository,
)


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    session: SessionToken


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: SessionTokenRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._decoy_hash: str | None = None

    def _decoy(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self._password_hasher.hash("decoy-password")
        return self._decoy_hash

    def execute(self, username: str, password: str) -> LoginResult:
        user = self._users.find_by_username(username) if username else None

        if user is None:
            # Unknown users pay for a hash comparison too.
            self._password_hasher.verify(password, self._decoy())
            raise InvalidCredentialsError()

        if not password or not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        session = self._tokens.issue(user.id)
        return LoginResult(user=user, session=session)
