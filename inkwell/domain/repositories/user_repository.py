from __future__ import annotations

from typing import Protocol

from inkwell.domain.entities import User


class UserRepository(Protocol):
    """사용자 디렉터리 (읽기 전용). 레코드는 외부 인증 시스템이 관리한다."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        """여러 사용자를 한 번에 조회. 없는 id는 결과에서 빠진다."""
        ...
