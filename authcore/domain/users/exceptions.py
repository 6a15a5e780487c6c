# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authcore.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.BAD_REQUEST
    message = "user already exists"


class InvalidCredentialsError(DomainError):
    # Same code and message for unknown users and wrong passwords.
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "invalid username or password"


ConflictError = UserAlreadyExistsError
AuthenticationError = InvalidCredentialsError
