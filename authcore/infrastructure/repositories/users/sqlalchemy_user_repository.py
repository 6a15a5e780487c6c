# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.domain.users.entities import SessionToken as DomainSessionToken
from authcore.domain.users.entities import User as DomainUser
from authcore.domain.users.exceptions import UserAlreadyExistsError
from authcore.domain.users.repositories import SessionTokenRepository, UserRepository
from authcore.infrastructure.db.models import SessionToken, User
from authcore.infrastructure.unit_of_work import unit_of_work_scope
from authcore.shared.errors import StoreError

TOKEN_BYTES = 48


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        full_name=row.full_name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(User).filter(User.username == username).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StoreError(f"users.find_by_username: {type(exc).__name__}") from exc

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    full_name=user.full_name,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            raise StoreError(f"users.add: {type(exc).__name__}") from exc


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(
        self, session_factory: Callable[[], Session], *, lifetime: timedelta
    ) -> None:
        self._session_factory = session_factory
        self._lifetime = lifetime

    def issue(self, user_id: int) -> DomainSessionToken:
        token_value = secrets.token_urlsafe(TOKEN_BYTES)
        issued_at = datetime.now(UTC)
        expires_at = issued_at + self._lifetime
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.add(
                    SessionToken(
                        user_id=user_id,
                        token=token_value,
                        issued_at=issued_at,
                        expires_at=expires_at,
                    )
                )
        except SQLAlchemyError as exc:
            raise StoreError(f"session_tokens.issue: {type(exc).__name__}") from exc
        return DomainSessionToken(user_id=user_id, token=token_value, expires_at=expires_at)
