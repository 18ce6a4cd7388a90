"""게시글 추천 테스트.

Post recommendation tests — One recommendation per member per post, enforced
by the service check and by the unique constraint underneath it.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from community.models.board import Post, PostRecommendation
from community.models.member import Member
from community.repositories.recommendation_repository import recommendation_repository
from community.services.member_service import member_service
from community.services.post_service import post_service
from community.utils.exceptions import AlreadyRecommendedError, DuplicateError, NotFoundError


class TestRecommend:
    """추천 기본 동작 테스트."""

    async def test_recommend(self, db: AsyncSession, alice_post: Post, bob: Member):
        post = await post_service.recommend(db, alice_post.id, bob.id)
        await db.commit()
        assert post.recommendation_count == 1
        assert await recommendation_repository.count_by_post(db, alice_post.id, bob.id) == 1

    async def test_members_recommend_independently(
        self, db: AsyncSession, alice_post: Post, bob: Member, carol: Member
    ):
        """bob과 carol이 각각 추천 → 2, bob 재추천 → 거부, 여전히 2."""
        post_id = alice_post.id
        await post_service.recommend(db, post_id, bob.id)
        post = await post_service.recommend(db, post_id, carol.id)
        await db.commit()
        assert post.recommendation_count == 2

        with pytest.raises(AlreadyRecommendedError):
            await post_service.recommend(db, post_id, bob.id)

        post = await post_service.get_by_id(db, post_id)
        assert post.recommendation_count == 2

    async def test_duplicate_recommend(self, db: AsyncSession, alice_post: Post, bob: Member):
        """같은 회원의 재추천은 409 AlreadyRecommendedError."""
        await post_service.recommend(db, alice_post.id, bob.id)
        await db.commit()

        with pytest.raises(AlreadyRecommendedError) as exc_info:
            await post_service.recommend(db, alice_post.id, bob.id)
        error = exc_info.value
        assert isinstance(error, DuplicateError)
        assert error.status_code == 409
        assert error.post_id == alice_post.id
        assert error.member_id == bob.id

    async def test_recommend_unknown_post(self, db: AsyncSession, bob: Member):
        with pytest.raises(NotFoundError) as exc_info:
            await post_service.recommend(db, uuid.uuid4(), bob.id)
        assert exc_info.value.entity == "Post"

    async def test_recommend_unknown_member(self, db: AsyncSession, alice_post: Post):
        with pytest.raises(NotFoundError) as exc_info:
            await post_service.recommend(db, alice_post.id, uuid.uuid4())
        assert exc_info.value.entity == "Member"


class TestRecommendConstraint:
    """저장소 제약 조건 테스트."""

    async def test_unique_constraint_rejects_duplicate_pair(
        self, db: AsyncSession, alice_post: Post, bob: Member
    ):
        """서비스를 거치지 않은 중복 INSERT도 거부됨."""
        db.add(PostRecommendation(post_id=alice_post.id, member_id=bob.id))
        await db.flush()
        db.add(PostRecommendation(post_id=alice_post.id, member_id=bob.id))
        with pytest.raises(IntegrityError):
            await db.flush()
        await db.rollback()

    async def test_concurrent_duplicate_is_translated(
        self, db: AsyncSession, alice_post: Post, bob: Member, monkeypatch
    ):
        """존재 확인을 통과한 동시 요청 — 제약 위반이 AlreadyRecommendedError로 변환됨."""
        post_id = alice_post.id
        bob_id = bob.id
        await post_service.recommend(db, post_id, bob_id)
        await db.commit()

        # 두 번째 요청이 첫 번째 커밋 전에 존재 확인을 했다고 가정
        async def _stale_check(*args, **kwargs) -> bool:
            return False

        monkeypatch.setattr(recommendation_repository, "exists_by_post_and_member", _stale_check)

        with pytest.raises(AlreadyRecommendedError):
            await post_service.recommend(db, post_id, bob_id)

        monkeypatch.undo()
        assert await recommendation_repository.count_by_post(db, post_id) == 1

    async def test_deleting_member_removes_their_recommendations(
        self, db: AsyncSession, alice_post: Post, bob: Member, carol: Member
    ):
        """회원 삭제 시 그 회원의 추천만 삭제됨."""
        post_id = alice_post.id
        bob_id = bob.id
        await post_service.recommend(db, post_id, bob_id)
        await post_service.recommend(db, post_id, carol.id)
        await db.commit()

        await member_service.delete_by_id(db, bob_id)
        await db.commit()

        assert await recommendation_repository.count_by_post(db, post_id) == 1
        assert await recommendation_repository.count_by_post(db, post_id, bob_id) == 0
