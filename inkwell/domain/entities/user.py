from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """외부 인증 시스템이 관리하는 사용자 레코드의 읽기 전용 투영."""

    id: str
    username: str

    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class Actor:
    """요청 단위의 인증된 호출자. 토큰 클레임에서 만들어진다."""

    id: str
    is_admin: bool = False
    username: Optional[str] = None
