from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

NAME_MAX_LENGTH = 50


@dataclass
class Category:
    """게시물 카테고리. id는 이름에서 파생된 슬러그."""

    name: str

    id: Optional[str] = None
    description: Optional[str] = None
