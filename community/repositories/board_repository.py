"""게시판 레포지토리 — 게시판 목록 및 코드 조회.

Board Repository — Board listing and lookup by code.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from community.models.board import Board
from community.repositories.base import BaseRepository


class BoardRepository(BaseRepository[Board]):
    """게시판 테이블 레포지토리.

    Repository handling database queries for the boards table.
    """

    def __init__(self) -> None:
        super().__init__(Board)

    async def get_by_code(
        self,
        db: AsyncSession,
        code: str,
    ) -> Board | None:
        """게시판 코드로 조회합니다 (대소문자 구분, 정확히 일치).

        Retrieve a board by its exact, case-sensitive code.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            code: 게시판 코드 (Board code, e.g. "male")

        Returns:
            Board | None: 게시판 또는 None (Board or None)
        """
        query: Select = select(Board).where(Board.code == code)
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
board_repository: BoardRepository = BoardRepository()
