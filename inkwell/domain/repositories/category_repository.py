from __future__ import annotations

from typing import Protocol

from inkwell.domain.entities import Category


class CategoryRepository(Protocol):
    """카테고리 저장소 인터페이스."""

    async def get_all(self) -> list[Category]: ...

    async def get_by_id(self, category_id: str) -> Category | None: ...

    async def add(self, category: Category) -> Category:
        """새 카테고리 저장. id가 이미 있으면 CategoryConflictError."""
        ...

    async def upsert(self, category: Category) -> Category:
        """없으면 생성, 있으면 업데이트."""
        ...

    async def delete(self, category_id: str) -> bool: ...
