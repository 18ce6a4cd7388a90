"""게시판 서비스 — 게시판 목록 및 코드 조회.

Board Service — Board listing and lookup by code.
Boards are read-only for the service layer; the seed script creates them.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from community.models.board import Board
from community.repositories.board_repository import board_repository
from community.schemas.board import BoardResponse
from community.utils.exceptions import NotFoundError


class BoardService:
    """게시판 조회 서비스."""

    def to_response(self, board: Board) -> BoardResponse:
        return BoardResponse(
            id=str(board.id),
            code=board.code,
            name=board.name,
            description=board.description,
        )

    async def get_all(self, db: AsyncSession) -> list[Board]:
        """전체 게시판 목록을 생성 순서대로 반환합니다."""
        boards = await board_repository.get_all(db, order_by=Board.created_at)
        return list(boards)

    async def get_by_code(self, db: AsyncSession, code: str) -> Board:
        """게시판 코드로 게시판을 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            code: 게시판 코드, 대소문자 구분 (Case-sensitive board code)

        Returns:
            Board: 조회된 게시판 (Found board)

        Raises:
            NotFoundError: 해당 코드의 게시판이 없을 때 (No board with that code)
        """
        board: Board | None = await board_repository.get_by_code(db, code)
        if board is None:
            raise NotFoundError(f"Board not found with code: {code}", entity="Board", key=code)
        return board


# 싱글턴 인스턴스 — Singleton instance
board_service: BoardService = BoardService()
