"""회원 및 인증 관련 Pydantic 요청/응답 스키마 정의.

Member and authentication Pydantic request/response schema definitions.
Request schemas enforce the member field rules: non-blank username and a
non-blank password of at least PASSWORD_MIN_LENGTH characters and at most
BCRYPT_MAX_BYTES UTF-8 bytes.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from community.utils.password import BCRYPT_MAX_BYTES, fits_bcrypt_limit

# 비밀번호 최소 길이 — Minimum password length
PASSWORD_MIN_LENGTH: int = 4


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def _within_bcrypt_limit(value: str) -> str:
    if not fits_bcrypt_limit(value):
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return value


class MemberCreate(BaseModel):
    """회원가입 요청 스키마.

    Member registration request schema.

    Attributes:
        username: 로그인 아이디 (Login username, unique)
        password: 비밀번호 (Plain text, bcrypt-hashed by the service)
    """

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)  # bcrypt 입력 한도 72바이트 (UTF-8)

    @field_validator("username", "password")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, value: str) -> str:
        return _within_bcrypt_limit(value)


class MemberUpdate(BaseModel):
    """회원 정보 수정 요청 스키마 — 사용자명과 비밀번호만 덮어씀.

    Member update request schema. Both fields are required and overwrite
    the stored values; nothing else about the member changes.
    """

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @field_validator("username", "password")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("password")
    @classmethod
    def check_password_bytes(cls, value: str) -> str:
        return _within_bcrypt_limit(value)


class LoginRequest(BaseModel):
    """로그인 요청 스키마."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after a successful login. The access token identifies the
    member on subsequent requests (Authorization: Bearer <token>).
    """

    access_token: str
    token_type: str = "bearer"
    member_id: str
    username: str


class MemberResponse(BaseModel):
    """회원 응답 스키마 (비밀번호 해시 제외)."""

    id: str
    username: str
    created_at: datetime
    updated_at: datetime
