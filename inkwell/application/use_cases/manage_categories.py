"""유즈케이스: 카테고리 목록/생성/삭제."""

from __future__ import annotations

import logging

from inkwell.domain.entities import Actor, Category
from inkwell.domain.entities.category import NAME_MAX_LENGTH
from inkwell.domain.exceptions import CategoryNotFoundError, ForbiddenError, ValidationError
from inkwell.domain.repositories.category_repository import CategoryRepository
from inkwell.domain.value_objects.slug import derive_slug

logger = logging.getLogger(__name__)


def build_category(name: str | None, description: str | None = None) -> Category:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Please provide a category name")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Category name cannot be more than {NAME_MAX_LENGTH} characters")
    category_id = derive_slug(name)
    if not category_id:
        raise ValidationError("Category name must contain at least one letter or digit")
    return Category(id=category_id, name=name, description=(description or "").strip() or None)


class ListCategoriesUseCase:
    def __init__(self, category_repo: CategoryRepository):
        self._category_repo = category_repo

    async def execute(self) -> list[Category]:
        return await self._category_repo.get_all()


class CreateCategoryUseCase:
    def __init__(self, category_repo: CategoryRepository):
        self._category_repo = category_repo

    async def execute(self, actor: Actor, name: str, description: str | None = None) -> Category:
        category = await self._category_repo.add(build_category(name, description))
        logger.info(f"카테고리 생성: id={category.id} by={actor.id}")
        return category


class DeleteCategoryUseCase:
    """관리자만 삭제 가능."""

    def __init__(self, category_repo: CategoryRepository):
        self._category_repo = category_repo

    async def execute(self, actor: Actor, category_id: str) -> None:
        if not actor.is_admin:
            logger.warning(f"카테고리 삭제 거부: actor={actor.id} category={category_id}")
            raise ForbiddenError("Access denied")
        if not await self._category_repo.delete(category_id):
            raise CategoryNotFoundError(category_id)
        logger.info(f"카테고리 삭제: id={category_id} by={actor.id}")
