"""게시글 서비스 — 게시글 CRUD, 조회수, 추천 비즈니스 로직.

Post Service — Business logic for post CRUD, view counting and recommendations.

Recommendation flow:
    1. 게시글 조회 (Load the post)            → NotFoundError
    2. 중복 추천 확인 (Duplicate pair check)   → AlreadyRecommendedError
    3. 회원 참조 확인 (Member reference check) → NotFoundError
    4. 추천 생성 후 게시글 목록에 추가 (Append to post.recommendations)
    5. flush — cascade로 추천 INSERT (Cascade insert)
       unique 제약 위반 시 AlreadyRecommendedError로 변환
       (A unique constraint violation from a concurrent request is
       translated into AlreadyRecommendedError)
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from community.models.board import Board, Post, PostRecommendation
from community.repositories.board_repository import board_repository
from community.repositories.member_repository import member_repository
from community.repositories.post_repository import SORT_LATEST, post_repository
from community.repositories.recommendation_repository import recommendation_repository
from community.schemas.board import PostCreate, PostResponse, PostUpdate
from community.utils.exceptions import (
    AlreadyRecommendedError,
    BadRequestError,
    NotFoundError,
)
from community.utils.logger import get_logger

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PostService:
    """게시글 관련 비즈니스 로직을 처리하는 서비스.

    Service handling post business logic.
    Methods flush but never commit; the caller owns the transaction.
    """

    def to_response(self, post: Post) -> PostResponse:
        """게시글 모델을 응답 스키마로 변환합니다.

        Requires author, board and recommendations to be loaded
        (post_repository.get_detail and the listing queries do this).
        """
        return PostResponse(
            id=str(post.id),
            title=post.title,
            content=post.content,
            author_id=str(post.member_id),
            author_username=post.author.username,
            board_code=post.board.code,
            board_name=post.board.name,
            view_count=post.view_count,
            recommendation_count=post.recommendation_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    async def register(
        self,
        db: AsyncSession,
        author_id: UUID,
        board_id: UUID,
        data: PostCreate,
    ) -> Post:
        """게시글을 등록합니다 — 작성자와 게시판은 호출자가 지정.

        Persist a new post for an existing author and board.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            author_id: 작성자 회원 ID (Author member UUID)
            board_id: 게시판 ID (Board UUID)
            data: 제목과 본문 (Title and content)

        Returns:
            Post: 관계가 로드된 저장된 게시글 (Stored post with relationships loaded)

        Raises:
            NotFoundError: 작성자 또는 게시판이 없을 때 (Author or board missing)
        """
        if not await member_repository.exists(db, {"id": author_id}):
            raise NotFoundError(
                f"Member not found with id: {author_id}", entity="Member", key=author_id
            )
        if not await board_repository.exists(db, {"id": board_id}):
            raise NotFoundError(
                f"Board not found with id: {board_id}", entity="Board", key=board_id
            )

        post: Post = await post_repository.create(
            db,
            {
                "title": data.title,
                "content": data.content,
                "member_id": author_id,
                "board_id": board_id,
            },
        )
        logger.info("Registered post %s in board %s by %s", post.id, board_id, author_id)

        # 관계 로드를 위해 다시 조회 — Re-fetch with relationships loaded
        return await self.get_by_id(db, post.id)

    async def create_in_board(
        self,
        db: AsyncSession,
        board_code: str,
        author_id: UUID,
        data: PostCreate,
    ) -> Post:
        """게시판 코드로 게시판을 찾아 게시글을 등록합니다.

        Raises:
            NotFoundError: 게시판 또는 작성자가 없을 때 (Board or author missing)
        """
        board: Board | None = await board_repository.get_by_code(db, board_code)
        if board is None:
            raise NotFoundError(
                f"Board not found with code: {board_code}", entity="Board", key=board_code
            )
        return await self.register(db, author_id, board.id, data)

    async def get_by_id(self, db: AsyncSession, post_id: UUID) -> Post:
        """ID로 게시글을 조회합니다.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
        """
        post: Post | None = await post_repository.get_detail(db, post_id)
        if post is None:
            raise NotFoundError(f"Post not found with id: {post_id}", entity="Post", key=post_id)
        return post

    async def list_by_board(
        self,
        db: AsyncSession,
        board_code: str,
        sort: str = SORT_LATEST,
    ) -> list[Post]:
        """게시판의 게시글 목록 — 게시판이 없으면 NotFoundError."""
        if await board_repository.get_by_code(db, board_code) is None:
            raise NotFoundError(
                f"Board not found with code: {board_code}", entity="Board", key=board_code
            )
        return await post_repository.get_by_board_code(db, board_code, sort)

    async def search_by_title(self, db: AsyncSession, keyword: str) -> list[Post]:
        return await post_repository.search_by_title(db, keyword)

    async def search_by_content(self, db: AsyncSession, keyword: str) -> list[Post]:
        return await post_repository.search_by_content(db, keyword)

    async def search_by_author(self, db: AsyncSession, keyword: str) -> list[Post]:
        return await post_repository.search_by_author(db, keyword)

    async def list_by_author(self, db: AsyncSession, username: str) -> list[Post]:
        """특정 회원이 작성한 게시글 목록 (사용자명 정확히 일치, 최신순).

        Raises:
            NotFoundError: 해당 사용자명의 회원이 없을 때 (Unknown username)
        """
        if not await member_repository.exists(db, {"username": username}):
            raise NotFoundError(
                f"Member not found with username: {username}", entity="Member", key=username
            )
        return await post_repository.get_by_author_username(db, username)

    async def list_created_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> list[Post]:
        """기간 안에 작성된 게시글 목록 — 양 끝 포함, 오래된 순.

        Naive datetimes are taken as UTC, the zone every timestamp is stored in.

        Raises:
            BadRequestError: 시작이 종료보다 늦을 때 (start after end)
        """
        start, end = _as_utc(start), _as_utc(end)
        if start > end:
            raise BadRequestError("Period start must not be after its end")
        return await post_repository.get_created_between(db, start, end)

    async def update(
        self,
        db: AsyncSession,
        post_id: UUID,
        data: PostUpdate,
    ) -> Post:
        """게시글의 제목과 본문만 수정합니다.

        Overwrite title and content and refresh updated_at. Author, board,
        view count and recommendations are left untouched.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
        """
        post: Post | None = await post_repository.update(
            db,
            post_id,
            {
                "title": data.title,
                "content": data.content,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        if post is None:
            raise NotFoundError(f"Post not found with id: {post_id}", entity="Post", key=post_id)

        return await self.get_by_id(db, post_id)

    async def delete_by_id(self, db: AsyncSession, post_id: UUID) -> None:
        """게시글을 삭제합니다 — 추천 기록도 함께 삭제됨.

        The existence check comes first, so a second delete of the same id
        fails with NotFoundError.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
        """
        if not await post_repository.exists(db, {"id": post_id}):
            raise NotFoundError(f"Post not found with id: {post_id}", entity="Post", key=post_id)

        await post_repository.delete(db, post_id)
        logger.info("Deleted post %s", post_id)

    async def view(
        self,
        db: AsyncSession,
        post_id: UUID,
        board_code: str | None = None,
    ) -> Post:
        """게시글 상세 조회 — 조회수를 1 증가시킵니다.

        Every call increments the view count, including repeated views by
        the same reader.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            post_id: 게시글 ID (Post UUID)
            board_code: 요청 URL의 게시판 코드, 대소문자 무시 비교
                        (Board code from the request, compared case-insensitively)

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
            BadRequestError: 게시글이 다른 게시판에 속할 때 (Board code mismatch)
        """
        post: Post = await self.get_by_id(db, post_id)

        if board_code is not None and post.board.code.lower() != board_code.lower():
            logger.warning(
                "Board code mismatch: post board code %s vs request board code %s",
                post.board.code,
                board_code,
            )
            raise BadRequestError("Board code mismatch")

        post.increment_view_count()
        await db.flush()
        return post

    async def recommend(
        self,
        db: AsyncSession,
        post_id: UUID,
        member_id: UUID,
    ) -> Post:
        """게시글을 추천합니다 — 회원당 게시글 1회.

        Record a recommendation of post_id by member_id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            post_id: 게시글 ID (Post UUID)
            member_id: 추천하는 회원 ID (Recommending member UUID)

        Returns:
            Post: 추천이 추가된 게시글 (Post including the new recommendation)

        Raises:
            NotFoundError: 게시글 또는 회원이 없을 때 (Post or member missing)
            AlreadyRecommendedError: 이미 추천한 게시글일 때 (Pair already recorded)
        """
        post: Post = await self.get_by_id(db, post_id)

        if await recommendation_repository.exists_by_post_and_member(db, post_id, member_id):
            logger.info("Member %s already recommended post %s", member_id, post_id)
            raise AlreadyRecommendedError(post_id, member_id)

        # 회원 전체를 로드하지 않고 존재만 확인 — Reference check without loading the member
        if not await member_repository.exists(db, {"id": member_id}):
            raise NotFoundError(
                f"Member not found with id: {member_id}", entity="Member", key=member_id
            )

        post.add_recommendation(PostRecommendation(member_id=member_id))

        try:
            await db.flush()
        except IntegrityError as exc:
            # 동시 추천 경쟁 — 두 요청이 모두 존재 확인을 통과한 경우
            # Concurrent recommend: both requests passed the existence check
            await db.rollback()
            logger.warning("Concurrent duplicate recommendation of post %s by %s", post_id, member_id)
            raise AlreadyRecommendedError(post_id, member_id) from exc

        logger.info("Member %s recommended post %s", member_id, post_id)
        return post


# 싱글턴 인스턴스 — Singleton instance
post_service: PostService = PostService()
