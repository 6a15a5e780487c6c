from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic_core import PydanticCustomError

from authcore.application.use_cases.users.register_user import RegisterUserInput
from authcore.domain.users.entities import User

PASSWORD_MAX_LENGTH = 1024


def _require_utf8(value: str) -> str:
    # Lone surrogates survive JSON decoding but not the store or the hasher.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise PydanticCustomError(
            "invalid_encoding",
            "Value must be valid UTF-8 text",
            {},
        ) from None
    return value


class RegisterRequestDTO(BaseModel):
    # Absent fields default to "" so the use case reports them as missing.
    # Length caps follow the users table columns.
    username: StrictStr = Field("", max_length=128)
    full_name: StrictStr = Field("", alias="fullName", max_length=256)
    password: StrictStr = Field("", max_length=PASSWORD_MAX_LENGTH)
    email: StrictStr = Field("", max_length=320)

    model_config = ConfigDict(validate_by_name=True, extra="ignore")

    @field_validator("username", "full_name", "password", "email")
    @classmethod
    def _utf8_only(cls, value: str) -> str:
        return _require_utf8(value)

    def to_input(self) -> RegisterUserInput:
        return RegisterUserInput(
            username=self.username,
            full_name=self.full_name,
            password=self.password,
            email=self.email,
        )


class LoginRequestDTO(BaseModel):
    username: StrictStr = Field("", max_length=128)
    password: StrictStr = Field("", max_length=PASSWORD_MAX_LENGTH)

    model_config = ConfigDict(extra="ignore")

    @field_validator("username", "password")
    @classmethod
    def _utf8_only(cls, value: str) -> str:
        return _require_utf8(value)


class AccountDTO(BaseModel):
    """Public view of a stored account; the password hash is not a field."""

    username: str
    full_name: str = Field(alias="fullName")
    email: str

    model_config = ConfigDict(validate_by_name=True)

    @classmethod
    def from_user(cls, user: User) -> AccountDTO:
        return cls(username=user.username, full_name=user.full_name, email=user.email)


class LoginUserDTO(BaseModel):
    username: str
    email: str
    login_token: str = Field(alias="loginToken")

    model_config = ConfigDict(validate_by_name=True)


class LoginSuccessDTO(BaseModel):
    success: bool = True
    message: str = "User logged in successfully"
    user: LoginUserDTO
