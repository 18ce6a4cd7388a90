"""게시글 라우터 — 검색, 조회, 수정, 삭제, 추천 엔드포인트.

Post Router — Search, author and period listings, lookup, update, delete and
recommend endpoints.
Only the author may update or delete a post; any logged-in member may
recommend a post once.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from community.api.deps import get_current_member
from community.database import get_db
from community.models.board import Post
from community.models.member import Member
from community.schemas.board import PostResponse, PostUpdate, RecommendResponse
from community.schemas.common import MessageResponse
from community.services.post_service import post_service
from community.utils.exceptions import BadRequestError, ForbiddenError

router: APIRouter = APIRouter()


@router.get("/search", response_model=list[PostResponse])
async def search_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
    title: Annotated[str | None, Query(description="제목 검색어")] = None,
    content: Annotated[str | None, Query(description="본문 검색어")] = None,
    author: Annotated[str | None, Query(description="작성자 아이디 검색어")] = None,
) -> list[PostResponse]:
    """제목, 본문 또는 작성자로 게시글을 검색합니다 (하나만 지정).

    Search posts by exactly one of title, content or author.
    """
    given = [v for v in (title, content, author) if v is not None]
    if len(given) != 1:
        raise BadRequestError("Specify exactly one of title, content or author")

    if title is not None:
        posts: list[Post] = await post_service.search_by_title(db, title)
    elif content is not None:
        posts = await post_service.search_by_content(db, content)
    else:
        posts = await post_service.search_by_author(db, author)
    return [post_service.to_response(p) for p in posts]


@router.get("/author/{username}", response_model=list[PostResponse])
async def list_posts_by_author(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[PostResponse]:
    """특정 회원이 작성한 게시글 목록 (최신순)."""
    posts: list[Post] = await post_service.list_by_author(db, username)
    return [post_service.to_response(p) for p in posts]


@router.get("/period", response_model=list[PostResponse])
async def list_posts_in_period(
    db: Annotated[AsyncSession, Depends(get_db)],
    start: Annotated[datetime, Query(description="시작 일시 (포함)")],
    end: Annotated[datetime, Query(description="종료 일시 (포함)")],
) -> list[PostResponse]:
    """기간 안에 작성된 게시글 목록 (오래된 순).

    List posts created between start and end, both inclusive. Naive
    datetimes are read as UTC.
    """
    posts: list[Post] = await post_service.list_created_between(db, start, end)
    return [post_service.to_response(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostResponse:
    """ID로 게시글을 조회합니다 (조회수 변화 없음)."""
    post: Post = await post_service.get_by_id(db, post_id)
    return post_service.to_response(post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: UUID,
    data: PostUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> PostResponse:
    """게시글의 제목과 본문을 수정합니다 (작성자만)."""
    existing: Post = await post_service.get_by_id(db, post_id)
    if existing.member_id != current_member.id:
        raise ForbiddenError("Only the author can edit this post")

    post: Post = await post_service.update(db, post_id, data)
    await db.commit()
    return post_service.to_response(post)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> dict[str, str]:
    """게시글을 삭제합니다 (작성자만) — 추천 기록도 함께 삭제."""
    existing: Post = await post_service.get_by_id(db, post_id)
    if existing.member_id != current_member.id:
        raise ForbiddenError("Only the author can delete this post")

    await post_service.delete_by_id(db, post_id)
    await db.commit()
    return {"message": "게시글이 삭제되었습니다 (Post deleted successfully)"}


@router.post("/{post_id}/recommend", response_model=RecommendResponse)
async def recommend_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> RecommendResponse:
    """게시글을 추천합니다 — 이미 추천했으면 409."""
    post: Post = await post_service.recommend(db, post_id, current_member.id)
    await db.commit()
    return RecommendResponse(post_id=str(post.id), recommendation_count=post.recommendation_count)
