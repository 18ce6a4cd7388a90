"""회원 레포지토리 — 회원 CRUD 및 사용자명 조회 쿼리.

Member Repository — CRUD and username lookups for members.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from community.models.member import Member
from community.repositories.base import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Member | None:
        """사용자명으로 회원을 조회합니다 (정확히 일치).

        Retrieve a member by exact username.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 로그인 아이디 (Login username)

        Returns:
            Member | None: 회원 또는 None (Member or None)
        """
        query: Select = select(Member).where(Member.username == username)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def search_by_username(
        self,
        db: AsyncSession,
        keyword: str,
    ) -> list[Member]:
        """사용자명에 키워드가 포함된 회원 목록을 조회합니다."""
        return await self.search_containing(
            db, Member.username, keyword, order_by=Member.created_at
        )


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
