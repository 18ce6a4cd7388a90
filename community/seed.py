"""초기 데이터 시드 스크립트 — 기본 게시판 생성.

Seed script — Creates the tables and the initial boards.
Boards have no create endpoint; this script is how they come to exist.

Usage:
    python -m community.seed

Creates:
    - male: 자기소개(남) — 남자가 본인을 소개하는 게시판
    - female: 자기소개(여) — 여자가 본인을 소개하는 게시판
"""

import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from community.database import async_session, engine, Base
from community.models import Board
from community.utils.logger import get_logger

logger = get_logger(__name__)

# (code, name, description)
DEFAULT_BOARDS: list[tuple[str, str, str]] = [
    ("male", "자기소개(남)", "남자가 본인을 소개하는 게시판"),
    ("female", "자기소개(여)", "여자가 본인을 소개하는 게시판"),
]


async def seed_boards(db: AsyncSession) -> list[Board]:
    """게시판이 하나도 없으면 기본 게시판을 생성합니다.

    Insert DEFAULT_BOARDS when the boards table is empty.
    Idempotent: 이미 게시판이 있으면 아무것도 하지 않음 (no-op when boards exist).

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        list[Board]: 새로 생성된 게시판 목록 (Newly created boards, empty if skipped)
    """
    count: int = (await db.execute(select(func.count()).select_from(Board))).scalar() or 0
    if count > 0:
        return []

    boards: list[Board] = [
        Board(code=code, name=name, description=description)
        for code, name, description in DEFAULT_BOARDS
    ]
    db.add_all(boards)
    await db.flush()
    return boards


async def seed() -> None:
    """테이블을 생성하고 기본 게시판을 시드합니다."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        created: list[Board] = await seed_boards(db)
        await db.commit()

    if created:
        logger.info("Seeded boards: %s", ", ".join(b.code for b in created))
    else:
        logger.info("Boards already exist. Skipping.")


if __name__ == "__main__":
    asyncio.run(seed())
