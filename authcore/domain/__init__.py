# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import SessionToken, User
from .users.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from .users.repositories import PasswordHasher, SessionTokenRepository, UserRepository

__all__ = [
    "AuthenticationError",
    "ConflictError",
    "InvalidCredentialsError",
    "PasswordHasher",
    "SessionToken",
    "SessionTokenRepository",
    "User",
    "UserAlreadyExistsError",
    "UserRepository",
]
