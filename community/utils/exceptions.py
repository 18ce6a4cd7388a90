"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Services raise these directly; FastAPI renders them as JSON error responses.
Each domain condition also carries typed attributes (entity, key, ids) so
non-HTTP callers such as scripts and tests can inspect what failed.

Usage:
    from community.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError(f"Post not found with id: {post_id}", entity="Post", key=post_id)
    raise DuplicateError("Already existing member with username: alice", entity="Member", key="alice")
"""

from typing import Any
from uuid import UUID

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 회원/게시판/게시글을 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a Member, Board or Post lookup by id, username or code fails.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
        entity: 엔티티 종류 (Entity type, e.g. "Post")
        key: 조회에 사용한 키 (Lookup key: id, username or code)
    """

    def __init__(
        self,
        detail: str = "Resource not found",
        entity: str | None = None,
        key: Any = None,
    ) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
        self.entity: str | None = entity
        self.key: Any = key


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 이미 존재하는 리소스를 생성하려 할 때 사용.

    409 Conflict exception (AlreadyExists).
    Raised when a registration violates a uniqueness rule, e.g. a member
    username that is already taken.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
        entity: 엔티티 종류 (Entity type, e.g. "Member")
        key: 중복된 키 (The conflicting natural key)
    """

    def __init__(
        self,
        detail: str = "Resource already exists",
        entity: str | None = None,
        key: Any = None,
    ) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
        self.entity: str | None = entity
        self.key: Any = key


class AlreadyRecommendedError(DuplicateError):
    """409 Conflict 예외 — 같은 회원이 같은 게시글을 다시 추천할 때 사용.

    Raised when a member tries to recommend a post they already recommended.
    Informational for the caller, never a system fault.

    Args:
        post_id: 게시글 ID (Post UUID)
        member_id: 회원 ID (Member UUID)
    """

    def __init__(self, post_id: UUID, member_id: UUID) -> None:
        super().__init__(
            "Member has already recommended this post",
            entity="PostRecommendation",
            key=(post_id, member_id),
        )
        self.post_id: UUID = post_id
        self.member_id: UUID = member_id


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 본인 소유가 아닌 리소스를 변경하려 할 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when authentication is missing, invalid, or expired.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidCredentialsError(UnauthorizedError):
    """비밀번호 불일치 예외.

    Raised by login when the username exists but the password does not match.
    """

    def __init__(self, detail: str = "Password not correct") -> None:
        super().__init__(detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when the request is invalid beyond what Pydantic validation catches
    (e.g. a post requested under a board it does not belong to).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
