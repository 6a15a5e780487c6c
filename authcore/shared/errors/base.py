# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(eq=False)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Business rule rejection; subclasses pin ``code``, ``status`` and ``message``."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(type(self), "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(type(self), "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(
            str, getattr(type(self), "message", "request rejected")
        )
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            message=resolved_message,
            context=context,
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        message: str = "internal error",
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(
            code=code, status=resolved_status, message=message, context=context
        )


class StoreError(InfrastructureError):
    """The user store failed; the detail stays in the logs, never on the wire."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(code="store_error")
        self.detail = detail


class PasswordHashingError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__(code="password_hashing_failed")


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        message: str = "invalid request",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            context=context,
        )


class MissingFieldsError(ValidationError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            message="all fields are required",
            context={"fields": fields},
        )


class MalformedBodyError(ValidationError):
    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            code="malformed_body",
            message="request body must be a JSON object of strings",
            context=context,
        )
