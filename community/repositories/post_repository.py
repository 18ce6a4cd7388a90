"""게시글 레포지토리 — 게시글 CRUD, 검색, 게시판별 목록 쿼리.

Post Repository — CRUD, substring search and per-board listing for posts.
Every query that returns posts to a caller eager-loads author, board and
recommendations with selectinload, so response building never triggers an
implicit lazy load.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from community.models.board import Board, Post, PostRecommendation
from community.models.member import Member
from community.repositories.base import BaseRepository

# 허용 정렬 키 — Supported sort keys for board listings
SORT_LATEST: str = "latest"
SORT_OLDEST: str = "oldest"
SORT_VIEWS: str = "views"
SORT_RECOMMENDATIONS: str = "recommendations"


class PostRepository(BaseRepository[Post]):
    """게시글 테이블 레포지토리.

    Repository handling database queries for the posts table.
    """

    def __init__(self) -> None:
        super().__init__(Post)

    def _detail_query(self) -> Select:
        """작성자/게시판/추천을 함께 로드하는 기본 쿼리."""
        return (
            select(Post)
            .options(
                selectinload(Post.author),
                selectinload(Post.board),
                selectinload(Post.recommendations),
            )
            .execution_options(populate_existing=True)
        )

    async def get_detail(
        self,
        db: AsyncSession,
        post_id: UUID,
    ) -> Post | None:
        """게시글을 작성자, 게시판, 추천 목록과 함께 조회합니다.

        Retrieve a post with author, board and recommendations loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            post_id: 게시글 ID (Post UUID)

        Returns:
            Post | None: 관계가 로드된 게시글 또는 None
                         (Post with relationships loaded, or None)
        """
        result = await db.execute(self._detail_query().where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def search_by_title(self, db: AsyncSession, keyword: str) -> list[Post]:
        """제목에 키워드가 포함된 게시글 목록."""
        query: Select = (
            self._detail_query()
            .where(Post.title.contains(keyword, autoescape=True))
            .order_by(Post.created_at.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def search_by_content(self, db: AsyncSession, keyword: str) -> list[Post]:
        """본문에 키워드가 포함된 게시글 목록."""
        query: Select = (
            self._detail_query()
            .where(Post.content.contains(keyword, autoescape=True))
            .order_by(Post.created_at.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def search_by_author(self, db: AsyncSession, keyword: str) -> list[Post]:
        """작성자 사용자명에 키워드가 포함된 게시글 목록."""
        query: Select = (
            self._detail_query()
            .join(Member, Member.id == Post.member_id)
            .where(Member.username.contains(keyword, autoescape=True))
            .order_by(Post.created_at.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_author_username(self, db: AsyncSession, username: str) -> list[Post]:
        """작성자 사용자명이 정확히 일치하는 게시글 목록 (최신순)."""
        query: Select = (
            self._detail_query()
            .join(Member, Member.id == Post.member_id)
            .where(Member.username == username)
            .order_by(Post.created_at.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_created_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> list[Post]:
        """작성 일시가 기간 안에 있는 게시글 목록.

        Posts whose created_at lies in [start, end], both ends inclusive,
        oldest first.
        """
        query: Select = (
            self._detail_query()
            .where(Post.created_at.between(start, end))
            .order_by(Post.created_at.asc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_board_code(
        self,
        db: AsyncSession,
        board_code: str,
        sort: str = SORT_LATEST,
    ) -> list[Post]:
        """게시판 코드에 속한 게시글 목록을 정렬하여 조회합니다.

        List the posts of a board.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            board_code: 게시판 코드 (Board code)
            sort: 정렬 기준 (latest | oldest | views | recommendations)

        Returns:
            list[Post]: 게시글 목록 (Posts with relationships loaded)
        """
        query: Select = (
            self._detail_query()
            .join(Board, Board.id == Post.board_id)
            .where(Board.code == board_code)
        )

        if sort == SORT_OLDEST:
            query = query.order_by(Post.created_at.asc())
        elif sort == SORT_VIEWS:
            query = query.order_by(Post.view_count.desc(), Post.created_at.desc())
        elif sort == SORT_RECOMMENDATIONS:
            # 추천수 서브쿼리 — Recommendation count per post
            counts = (
                select(
                    PostRecommendation.post_id.label("post_id"),
                    func.count(PostRecommendation.id).label("cnt"),
                )
                .group_by(PostRecommendation.post_id)
                .subquery()
            )
            query = query.outerjoin(counts, counts.c.post_id == Post.id).order_by(
                func.coalesce(counts.c.cnt, 0).desc(), Post.created_at.desc()
            )
        else:
            query = query.order_by(Post.created_at.desc())

        result = await db.execute(query)
        return list(result.scalars().all())

    async def delete(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> bool:
        """게시글과 그 추천 목록을 함께 삭제합니다.

        Delete a post. Recommendations are loaded first so the ORM cascade
        removes them even on stores without ON DELETE CASCADE enforcement.
        """
        post: Post | None = await self.get_detail(db, record_id)
        if post is None:
            return False

        await db.delete(post)
        await db.flush()
        return True


# 싱글턴 인스턴스 — Singleton instance
post_repository: PostRepository = PostRepository()
