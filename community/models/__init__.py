"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the SQLAlchemy
metadata, which Alembic and relationship resolution require.

Modules:
    member: 회원 (Member)
    board: 게시판, 게시글, 게시글 추천 (Board, Post, PostRecommendation)
"""

from community.models.member import Member
from community.models.board import Board, Post, PostRecommendation

__all__ = [
    "Member",
    "Board", "Post", "PostRecommendation",
]
