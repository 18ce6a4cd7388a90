"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates the member, board and post routers
into a single router for inclusion in the FastAPI application.

Included routers:
    - members: 회원가입, 로그인, 회원 관리 (Registration, login, member management)
    - boards: 게시판 및 게시판별 게시글 (Boards and per-board posts)
    - posts: 게시글 검색, 수정, 삭제, 추천 (Post search, edit, delete, recommend)
"""

from fastapi import APIRouter

from community.api.members import router as members_router
from community.api.boards import router as boards_router
from community.api.posts import router as posts_router

api_router: APIRouter = APIRouter()

api_router.include_router(members_router, prefix="/members", tags=["Members"])
api_router.include_router(boards_router, prefix="/boards", tags=["Boards"])
api_router.include_router(posts_router, prefix="/posts", tags=["Posts"])
