"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.
The token identifies the calling member; services receive the member id
explicitly instead of reading it from a server-side session.

JWT Payload Structure:
    {
        "sub": "member_uuid",   # 회원 ID (Member identifier)
        "username": "alice",    # 로그인 아이디 (Login username)
        "exp": 1234567890,      # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"        # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from community.config import settings


def create_access_token(data: dict[str, Any]) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a JWT access token with the given payload data.
    Token expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Args:
        data: JWT 페이로드 데이터, 일반적으로 {"sub": member_id, "username": username}
              (JWT payload data)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 서명/만료를 검증합니다.

    Decode a JWT and verify its signature and expiration.

    Args:
        token: 인코딩된 JWT 문자열 (Encoded JWT string)

    Returns:
        dict: 디코딩된 페이로드 (Decoded payload)

    Raises:
        jwt.ExpiredSignatureError: 토큰이 만료됨 (Token expired)
        jwt.InvalidTokenError: 토큰이 유효하지 않음 (Invalid token)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
