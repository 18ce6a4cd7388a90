"""게시판, 게시글, 추천 SQLAlchemy ORM 모델 정의.

Board, Post and PostRecommendation SQLAlchemy ORM model definitions.

Tables:
    - boards: 게시판 (Boards identified by a short unique code, e.g. "male")
    - posts: 게시글 (Posts, each in exactly one board by exactly one author)
    - post_recommendations: 게시글 추천 (At most one per post + member pair)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, Integer, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from community.database import Base


class Board(Base):
    """게시판 모델 — 게시글을 담는 카테고리.

    Board model — A named category containing posts.
    Boards are created by the seed initializer and never updated.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        code: 게시판 코드 (Short unique slug used in URLs, e.g. "male")
        name: 게시판 이름 (Unique display name)
        description: 게시판 설명 (Optional description)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Same as created_at, boards have no update path)
    """

    __tablename__ = "boards"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("code", name="uq_boards_code"),
        UniqueConstraint("name", name="uq_boards_name"),
    )


class Post(Base):
    """게시글 모델 — 게시판의 개별 글.

    Post model — A single article in a board.
    Title and content are the only fields changed after creation.
    Author and board are fixed at construction; the view count only moves
    through increment_view_count(); recommendations only through
    add_recommendation().

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 제목 (Title, non-blank)
        content: 본문 (Content, non-blank, large text)
        member_id: 작성자 FK (Author member)
        board_id: 게시판 FK (Owning board)
        view_count: 조회수 (View count, starts at 0)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last title/content update)

    Relationships:
        author: 작성자 (Author member, not owned)
        board: 게시판 (Board, not owned)
        recommendations: 추천 목록 (Owned, cascade delete + orphan removal)
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # 작성자 FK — 회원 삭제는 작성 글이 있으면 거부됨 (restricted while the member has posts)
    member_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("members.id"), nullable=False, index=True)
    board_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("boards.id"), nullable=False, index=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships (load explicitly with selectinload)
    author = relationship("Member")
    board = relationship("Board")
    recommendations = relationship(
        "PostRecommendation",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        # 플러시 전에도 0으로 보이도록 (visible as 0 before the first flush)
        if self.view_count is None:
            self.view_count = 0

    def increment_view_count(self) -> None:
        """조회수를 1 증가시킵니다."""
        self.view_count += 1

    def add_recommendation(self, recommendation: "PostRecommendation") -> None:
        """추천을 게시글의 추천 목록에 추가합니다 (저장은 cascade로 처리)."""
        self.recommendations.append(recommendation)

    @property
    def recommendation_count(self) -> int:
        """추천수 — 추천 목록의 크기 (requires recommendations to be loaded)."""
        return len(self.recommendations)


class PostRecommendation(Base):
    """게시글 추천 모델 — 회원 한 명이 게시글 하나를 추천한 기록.

    PostRecommendation model — One member's like on one post.
    Never updated. Deleted together with its post.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        post_id: 게시글 FK (Recommended post, CASCADE on post deletion)
        member_id: 회원 FK (Recommending member, CASCADE on member deletion)
        created_at: 추천 일시 UTC (Recommendation timestamp)

    Constraints:
        uq_post_recommendation_post_member: 회원당 게시글 1회 추천
                                            (At most one recommendation per post + member)
    """

    __tablename__ = "post_recommendations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    member_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("members.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("post_id", "member_id", name="uq_post_recommendation_post_member"),
    )

    post = relationship("Post", back_populates="recommendations")
