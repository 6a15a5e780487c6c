# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import WerkzeugPasswordHasher
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.register_user import RegisterUserInput, RegisterUserUseCase

__all__ = [
    "LoginResult",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "WerkzeugPasswordHasher",
]
