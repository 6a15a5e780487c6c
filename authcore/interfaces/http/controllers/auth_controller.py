# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from authcore.application.use_cases.users.login_user import LoginUserUseCase
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from authcore.infrastructure.audit import AuditAction, audit_log
from authcore.interfaces.http.dto.auth import (
    AccountDTO,
    LoginRequestDTO,
    LoginSuccessDTO,
    LoginUserDTO,
    RegisterRequestDTO,
)
from authcore.shared.config.settings import SecurityConfig, SessionConfig
from authcore.shared.errors import MalformedBodyError
from authcore.shared.errors.validation import raise_malformed_body
from authcore.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _json_object() -> dict[str, Any]:
    payload = request.get_json(silent=True, force=True)
    if not isinstance(payload, dict):
        raise MalformedBodyError()
    return payload


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        session_config: SessionConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._session_config = session_config
        self._security_config = security_config

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_json_object())
        except ValidationError as exc:
            raise_malformed_body(exc)

        try:
            user = self._register_use_case.execute(dto.to_input())
        except UserAlreadyExistsError:
            audit_log(
                AuditAction.REGISTER_FAILED,
                ip_address=_get_client_ip(),
                details={"username": dto.username, "reason": "duplicate"},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"username": user.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(AccountDTO.from_user(user).model_dump(by_alias=True)), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_object())
        except ValidationError as exc:
            raise_malformed_body(exc)

        ip_address = _get_client_ip()
        try:
            result = self._login_use_case.execute(dto.username, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=result.user.id,
            ip_address=ip_address,
            details={"username": result.user.username},
            success=True,
        )

        payload = LoginSuccessDTO(
            user=LoginUserDTO(
                username=result.user.username,
                email=result.user.email,
                login_token=result.session.token,
            )
        ).model_dump(by_alias=True)
        response = jsonify(payload)
        response.set_cookie(
            self._session_config.cookie_name,
            result.session.token,
            path="/",
            max_age=self._session_config.lifetime,
            httponly=True,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
        )
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
