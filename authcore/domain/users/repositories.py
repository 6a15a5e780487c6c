# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SessionToken, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None:
        """Return the account, ``None`` when absent; raise ``StoreError`` on failure."""
        ...

    def add(self, user: User) -> User:
        """Persist a new account; raise ``UserAlreadyExistsError`` on a taken username."""
        ...


class SessionTokenRepository(Protocol):
    def issue(self, user_id: int) -> SessionToken: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
