"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh aiosqlite engine with the full schema, so no external
database server is required. Foreign keys are switched on per connection so
ON DELETE CASCADE and restrict rules behave like PostgreSQL.
"""

import os

# 앱 설정 로드 전에 테스트 DB URL 지정 — Must run before community.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from community.database import Base, get_db
from community.main import app
from community.models import *  # noqa: F401,F403 — register all models with metadata
from community.models.board import Board, Post
from community.models.member import Member
from community.schemas.board import PostCreate
from community.schemas.member import MemberCreate
from community.seed import seed_boards
from community.services.member_service import member_service
from community.services.post_service import post_service
from community.utils.jwt import create_access_token

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 인메모리 DB와 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(eng.sync_engine, "connect", _enable_foreign_keys)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """같은 DB를 바라보는 추가 세션이 필요한 테스트용 팩토리."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def boards(db: AsyncSession) -> dict[str, Board]:
    """기본 게시판(male, female)을 시드합니다."""
    created: list[Board] = await seed_boards(db)
    await db.commit()
    return {b.code: b for b in created}


async def _register(db: AsyncSession, username: str, password: str) -> Member:
    member: Member = await member_service.register(
        db, MemberCreate(username=username, password=password)
    )
    await db.commit()
    return member


@pytest_asyncio.fixture
async def alice(db: AsyncSession) -> Member:
    """회원 alice를 생성합니다."""
    return await _register(db, "alice", "alice123!")


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> Member:
    """회원 bob을 생성합니다."""
    return await _register(db, "bob", "bob123!")


@pytest_asyncio.fixture
async def carol(db: AsyncSession) -> Member:
    """회원 carol을 생성합니다."""
    return await _register(db, "carol", "carol123!")


@pytest_asyncio.fixture
async def alice_post(db: AsyncSession, boards, alice) -> Post:
    """alice가 male 게시판에 작성한 게시글."""
    post: Post = await post_service.register(
        db,
        alice.id,
        boards["male"].id,
        PostCreate(title="Hello", content="I am alice"),
    )
    await db.commit()
    return post


def make_token(member: Member) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(member.id), "username": member.username})


@pytest.fixture
def alice_token(alice) -> str:
    return make_token(alice)


@pytest.fixture
def bob_token(bob) -> str:
    return make_token(bob)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
