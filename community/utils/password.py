"""회원 비밀번호 해싱 및 검증 유틸리티 모듈.

Member password hashing and verification.
Members never have their password stored as plain text; registration and
profile updates store a salted bcrypt hash, and login compares with
bcrypt's constant-time check.

bcrypt only accepts up to 72 bytes of input. The limit counts UTF-8 bytes,
not characters: a Hangul syllable takes 3 bytes.
"""

import bcrypt

# bcrypt 입력 한도 (바이트) — bcrypt input limit in bytes
BCRYPT_MAX_BYTES: int = 72


def fits_bcrypt_limit(password: str) -> bool:
    """UTF-8 인코딩 길이가 bcrypt 한도 이내인지 확인합니다."""
    return len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password with a fresh random salt.
    Callers validate the length first (see fits_bcrypt_limit).

    Args:
        password: 평문 비밀번호 (Plain text password, at most 72 UTF-8 bytes)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """평문 비밀번호가 저장된 해시와 일치하는지 확인합니다.

    A password longer than the bcrypt limit can never match a stored hash,
    so it is rejected without calling bcrypt.

    Args:
        plain_password: 로그인 시 입력한 비밀번호 (Password supplied at login)
        password_hash: 회원에게 저장된 bcrypt 해시 (Stored member hash)

    Returns:
        bool: 일치 여부 (True if the password matches)
    """
    if not fits_bcrypt_limit(plain_password):
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
