"""게시판 및 게시글 관련 Pydantic 요청/응답 스키마 정의.

Board and Post Pydantic request/response schema definitions.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# === 게시판 (Board) 스키마 ===

class BoardResponse(BaseModel):
    """게시판 응답 스키마."""

    id: str
    code: str  # 게시판 코드 (Board slug, e.g. "male")
    name: str
    description: str | None = None


# === 게시글 (Post) 스키마 ===

class PostCreate(BaseModel):
    """게시글 작성 요청 스키마.

    Post creation request schema. The board comes from the URL path and
    the author from the bearer token, never from the body.

    Attributes:
        title: 제목 (Title, non-blank)
        content: 본문 (Content, non-blank)
    """

    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class PostUpdate(BaseModel):
    """게시글 수정 요청 스키마 — 제목과 본문만 수정 가능.

    Post update request schema. Author, board, view count and
    recommendations are not updatable through this schema.
    """

    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class PostResponse(BaseModel):
    """게시글 응답 스키마.

    Attributes:
        id: 게시글 UUID (Post identifier)
        title: 제목 (Title)
        content: 본문 (Content)
        author_id: 작성자 UUID (Author member identifier)
        author_username: 작성자 아이디 (Author username)
        board_code: 게시판 코드 (Board code)
        board_name: 게시판 이름 (Board name)
        view_count: 조회수 (View count)
        recommendation_count: 추천수 (Number of recommendations)
        created_at: 작성 일시 (Creation timestamp)
        updated_at: 수정 일시 (Last update timestamp)
    """

    id: str
    title: str
    content: str
    author_id: str
    author_username: str
    board_code: str
    board_name: str
    view_count: int
    recommendation_count: int
    created_at: datetime
    updated_at: datetime


class RecommendResponse(BaseModel):
    """추천 결과 응답 스키마."""

    post_id: str
    recommendation_count: int
