"""회원 라우터 — 회원가입, 로그인, 회원 조회/수정/삭제 엔드포인트.

Member Router — Registration, login, lookup, update and delete endpoints.
Members may only update or delete their own account.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from community.api.deps import get_current_member
from community.database import get_db
from community.models.member import Member
from community.schemas.common import MessageResponse
from community.schemas.member import (
    LoginRequest,
    MemberCreate,
    MemberResponse,
    MemberUpdate,
    TokenResponse,
)
from community.services.member_service import member_service
from community.utils.exceptions import (
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from community.utils.jwt import create_access_token

router: APIRouter = APIRouter()


@router.post("/", response_model=MemberResponse, status_code=201)
async def register_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원가입 — 사용자명이 중복되면 409.

    Register a new member.
    """
    member: Member = await member_service.register(db, data)
    await db.commit()
    return member_service.to_response(member)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 — 성공 시 액세스 토큰 발급.

    Log in and receive a bearer token. Unknown usernames and wrong
    passwords produce the same 401 message.
    """
    try:
        member: Member = await member_service.login(db, data.username, data.password)
    except (NotFoundError, InvalidCredentialsError):
        raise UnauthorizedError("Invalid username or password")

    token: str = create_access_token({"sub": str(member.id), "username": member.username})
    return TokenResponse(
        access_token=token,
        member_id=str(member.id),
        username=member.username,
    )


@router.get("/me", response_model=MemberResponse)
async def get_me(
    current_member: Annotated[Member, Depends(get_current_member)],
) -> MemberResponse:
    """현재 로그인한 회원 정보를 조회합니다."""
    return member_service.to_response(current_member)


@router.get("/", response_model=list[MemberResponse])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    keyword: Annotated[str, Query(description="사용자명 검색어")] = "",
) -> list[MemberResponse]:
    """사용자명에 검색어가 포함된 회원 목록을 조회합니다."""
    members: list[Member] = await member_service.search_by_username(db, keyword)
    return [member_service.to_response(m) for m in members]


@router.get("/username/{username}", response_model=MemberResponse)
async def get_member_by_username(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """사용자명으로 회원을 조회합니다."""
    member: Member = await member_service.get_by_username(db, username)
    return member_service.to_response(member)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """ID로 회원을 조회합니다."""
    member: Member = await member_service.get_by_id(db, member_id)
    return member_service.to_response(member)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: UUID,
    data: MemberUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> MemberResponse:
    """본인 계정의 사용자명과 비밀번호를 수정합니다."""
    if current_member.id != member_id:
        raise ForbiddenError("Members can only update their own account")
    member: Member = await member_service.update(db, member_id, data)
    await db.commit()
    return member_service.to_response(member)


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_member(
    member_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> dict[str, str]:
    """본인 계정을 삭제합니다 (회원 탈퇴)."""
    if current_member.id != member_id:
        raise ForbiddenError("Members can only delete their own account")
    await member_service.delete_by_id(db, member_id)
    await db.commit()
    return {"message": "회원이 삭제되었습니다 (Member deleted successfully)"}
