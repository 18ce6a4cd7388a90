"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 계정 (Member accounts, username is globally unique)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from community.database import Base


class Member(Base):
    """회원 모델 — 게시판 사용자 계정.

    Member model — Message board user account.
    A member authors posts and recommends posts of other members.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        username: 로그인 아이디 (Login username, globally unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        created_at: 생성 일시 UTC (Creation timestamp, never changed)
        updated_at: 수정 일시 UTC (Last profile update timestamp)

    Constraints:
        uq_members_username: 사용자명 고유 (Unique username)
    """

    __tablename__ = "members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디 — 전체 고유 (unique across the board)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    # 비밀번호 해시 — 평문 저장 금지 (never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — 서비스의 update 호출에서 명시적으로 갱신 (set explicitly by MemberService.update)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("username", name="uq_members_username"),
    )

    def __repr__(self) -> str:
        return f"<Member id={self.id} username={self.username!r}>"
