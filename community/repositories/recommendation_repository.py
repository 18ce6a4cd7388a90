"""게시글 추천 레포지토리 — 추천 존재 여부 및 개수 조회.

PostRecommendation Repository — Existence and count queries.
Recommendations are saved through the Post cascade, never directly.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from community.models.board import PostRecommendation
from community.repositories.base import BaseRepository


class RecommendationRepository(BaseRepository[PostRecommendation]):
    """게시글 추천 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PostRecommendation)

    async def exists_by_post_and_member(
        self,
        db: AsyncSession,
        post_id: UUID,
        member_id: UUID,
    ) -> bool:
        """해당 회원이 해당 게시글을 이미 추천했는지 확인합니다.

        Check whether a (post, member) recommendation already exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            post_id: 게시글 ID (Post UUID)
            member_id: 회원 ID (Member UUID)

        Returns:
            bool: 추천 존재 여부 (Whether the pair is already recorded)
        """
        return await self.exists(db, {"post_id": post_id, "member_id": member_id})

    async def count_by_post(
        self,
        db: AsyncSession,
        post_id: UUID,
        member_id: UUID | None = None,
    ) -> int:
        """게시글의 추천 수를 저장소에서 직접 계산합니다.

        Count stored recommendation rows for a post, optionally for one member.
        """
        query: Select = (
            select(func.count())
            .select_from(PostRecommendation)
            .where(PostRecommendation.post_id == post_id)
        )
        if member_id is not None:
            query = query.where(PostRecommendation.member_id == member_id)
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
recommendation_repository: RecommendationRepository = RecommendationRepository()
