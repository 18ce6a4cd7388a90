"""게시판 라우터 — 게시판 조회, 게시판별 게시글 목록/작성/상세 엔드포인트.

Board Router — Board listing, per-board post listing, post creation and
post detail view (which increments the view count).
"""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from community.api.deps import get_current_member
from community.database import get_db
from community.models.board import Board, Post
from community.models.member import Member
from community.schemas.board import BoardResponse, PostCreate, PostResponse
from community.services.board_service import board_service
from community.services.post_service import post_service

router: APIRouter = APIRouter()

SortOption = Literal["latest", "oldest", "views", "recommendations"]


@router.get("/", response_model=list[BoardResponse])
async def list_boards(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[BoardResponse]:
    """전체 게시판 목록을 조회합니다."""
    boards: list[Board] = await board_service.get_all(db)
    return [board_service.to_response(b) for b in boards]


@router.get("/{code}", response_model=BoardResponse)
async def get_board(
    code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BoardResponse:
    """게시판 코드로 게시판을 조회합니다."""
    board: Board = await board_service.get_by_code(db, code)
    return board_service.to_response(board)


@router.get("/{code}/posts", response_model=list[PostResponse])
async def list_board_posts(
    code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    sort: Annotated[SortOption, Query(description="정렬 기준")] = "latest",
) -> list[PostResponse]:
    """게시판의 게시글 목록을 조회합니다.

    List posts of a board sorted by latest, oldest, views or recommendations.
    """
    posts: list[Post] = await post_service.list_by_board(db, code, sort)
    return [post_service.to_response(p) for p in posts]


@router.post("/{code}/posts", response_model=PostResponse, status_code=201)
async def create_post(
    code: str,
    data: PostCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> PostResponse:
    """게시판에 게시글을 작성합니다 — 작성자는 로그인한 회원."""
    post: Post = await post_service.create_in_board(db, code, current_member.id, data)
    await db.commit()
    return post_service.to_response(post)


@router.get("/{code}/posts/{post_id}", response_model=PostResponse)
async def view_post(
    code: str,
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostResponse:
    """게시글 상세 조회 — 요청마다 조회수 1 증가.

    Detail view. Fails with 400 when the post belongs to another board.
    """
    post: Post = await post_service.view(db, post_id, board_code=code)
    await db.commit()
    return post_service.to_response(post)
