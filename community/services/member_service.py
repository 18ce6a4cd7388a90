"""회원 서비스 — 회원가입, 로그인, 회원 CRUD 비즈니스 로직.

Member Service — Business logic for registration, login and member CRUD.
Username uniqueness is checked here for a clear error message; the unique
constraint on members.username stays the authoritative guarantee and its
violation is translated into the same DuplicateError.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from community.models.member import Member
from community.repositories.member_repository import member_repository
from community.repositories.post_repository import post_repository
from community.schemas.member import MemberCreate, MemberResponse, MemberUpdate
from community.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
)
from community.utils.logger import get_logger
from community.utils.password import hash_password, verify_password

logger = get_logger(__name__)


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    All methods flush but never commit; the caller owns the transaction.
    """

    def to_response(self, member: Member) -> MemberResponse:
        """회원 모델을 응답 스키마로 변환합니다 (비밀번호 해시 제외)."""
        return MemberResponse(
            id=str(member.id),
            username=member.username,
            created_at=member.created_at,
            updated_at=member.updated_at,
        )

    async def register(
        self,
        db: AsyncSession,
        data: MemberCreate,
    ) -> Member:
        """새 회원을 등록합니다.

        Register a new member after the duplicate username check.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 데이터 (Registration data)

        Returns:
            Member: 생성된 회원 — id와 생성 일시가 할당됨
                    (Created member with id and timestamps assigned)

        Raises:
            DuplicateError: 같은 사용자명이 이미 존재할 때
                            (When the username already exists)
        """
        await self._validate_duplicate_username(db, data.username)

        try:
            member: Member = await member_repository.create(
                db,
                {
                    "username": data.username,
                    "password_hash": hash_password(data.password),
                },
            )
        except IntegrityError as exc:
            # 동시 가입 경쟁 — 저장소 제약 조건이 두 번째 INSERT를 거부
            # Concurrent registration: the unique constraint rejected the second insert
            await db.rollback()
            raise self._duplicate(data.username) from exc

        logger.info("Registered member %s (%s)", member.username, member.id)
        return member

    async def get_by_id(self, db: AsyncSession, member_id: UUID) -> Member:
        """ID로 회원을 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError(
                f"Member not found with id: {member_id}", entity="Member", key=member_id
            )
        return member

    async def get_by_username(self, db: AsyncSession, username: str) -> Member:
        """사용자명으로 회원을 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.get_by_username(db, username)
        if member is None:
            raise NotFoundError(
                f"Member not found with username: {username}", entity="Member", key=username
            )
        return member

    async def search_by_username(self, db: AsyncSession, keyword: str) -> list[Member]:
        """사용자명에 키워드가 포함된 회원 목록 — 없으면 빈 목록."""
        return await member_repository.search_by_username(db, keyword)

    async def update(
        self,
        db: AsyncSession,
        member_id: UUID,
        data: MemberUpdate,
    ) -> Member:
        """회원의 사용자명과 비밀번호를 덮어씁니다.

        Overwrite username and password only, and refresh updated_at.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_id: 회원 ID (Member UUID)
            data: 수정 데이터 (Update data)

        Returns:
            Member: 수정된 회원 (Updated member)

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
            DuplicateError: 새 사용자명을 다른 회원이 사용 중일 때
                            (New username belongs to another member)
        """
        existing: Member = await self.get_by_id(db, member_id)

        if data.username != existing.username:
            await self._validate_duplicate_username(db, data.username)

        try:
            member: Member | None = await member_repository.update(
                db,
                member_id,
                {
                    "username": data.username,
                    "password_hash": hash_password(data.password),
                    "updated_at": datetime.now(timezone.utc),
                },
            )
        except IntegrityError as exc:
            await db.rollback()
            raise self._duplicate(data.username) from exc

        if member is None:
            raise NotFoundError(
                f"Member not found with id: {member_id}", entity="Member", key=member_id
            )
        return member

    async def delete_by_id(self, db: AsyncSession, member_id: UUID) -> None:
        """회원을 삭제합니다 — 존재 확인 후 삭제.

        Delete a member. The existence check comes first, so deleting the
        same id twice fails with NotFoundError the second time. A member who
        still authors posts cannot be deleted; their recommendations go with
        them (ON DELETE CASCADE).

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
            BadRequestError: 작성한 게시글이 남아 있을 때 (Member still has posts)
        """
        if not await member_repository.exists(db, {"id": member_id}):
            raise NotFoundError(
                f"Member not found with id: {member_id}", entity="Member", key=member_id
            )

        if await post_repository.exists(db, {"member_id": member_id}):
            logger.warning("Rejected deletion of member %s with posts", member_id)
            raise self._has_posts(member_id)

        try:
            await member_repository.delete(db, member_id)
        except IntegrityError as exc:
            # 확인 후 다른 요청이 게시글을 작성한 경우 — A post was written after the check
            await db.rollback()
            raise self._has_posts(member_id) from exc

        logger.info("Deleted member %s", member_id)

    async def login(self, db: AsyncSession, username: str, password: str) -> Member:
        """로그인 — 사용자명과 비밀번호를 검증합니다.

        The two failure kinds stay distinct here; the HTTP layer collapses
        them into one message.

        Raises:
            NotFoundError: 사용자명이 존재하지 않을 때 (Unknown username)
            InvalidCredentialsError: 비밀번호가 일치하지 않을 때, bcrypt 한도를 넘는 비밀번호 포함
                                     (Wrong password, including ones over the bcrypt limit)
        """
        member: Member = await self.get_by_username(db, username)
        if not verify_password(password, member.password_hash):
            raise InvalidCredentialsError()
        return member

    async def _validate_duplicate_username(self, db: AsyncSession, username: str) -> None:
        if await member_repository.exists(db, {"username": username}):
            logger.warning("Rejected duplicate username %s", username)
            raise self._duplicate(username)

    @staticmethod
    def _has_posts(member_id: UUID) -> BadRequestError:
        return BadRequestError(f"Member has posts and cannot be deleted: {member_id}")

    @staticmethod
    def _duplicate(username: str) -> DuplicateError:
        return DuplicateError(
            f"Already existing member with username: {username}",
            entity="Member",
            key=username,
        )


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
