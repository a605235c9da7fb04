"""유즈케이스: 게시물 생성/조회/수정/삭제.

모든 변경은 애그리거트 전체를 읽고 → 메모리에서 바꾸고 → 통째로 저장한다.
저장은 version 조건부 쓰기이며, 충돌 시 StaleAggregateError를 그대로 올린다 (재시도 없음).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from inkwell.application.use_cases.post_views import PostView, resolve_views
from inkwell.domain.entities import Actor, Post
from inkwell.domain.entities.post import EXCERPT_MAX_LENGTH, TITLE_MAX_LENGTH
from inkwell.domain.exceptions import (
    CategoryNotFoundError,
    DomainError,
    PostNotFoundError,
    ValidationError,
)
from inkwell.domain.repositories.category_repository import CategoryRepository
from inkwell.domain.repositories.post_repository import PostRepository
from inkwell.domain.repositories.user_repository import UserRepository
from inkwell.domain.services.asset_store import AssetStore, ImageUpload
from inkwell.domain.services.authorization import ensure_can_mutate
from inkwell.domain.value_objects.slug import derive_slug

logger = logging.getLogger(__name__)


@dataclass
class PostDraft:
    title: str
    content: str
    category_id: str
    excerpt: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    is_published: bool = False


@dataclass
class PostPatch:
    """None인 필드는 변경하지 않는다."""

    title: Optional[str] = None
    content: Optional[str] = None
    category_id: Optional[str] = None
    excerpt: Optional[str] = None
    tags: Optional[list[str]] = None
    is_published: Optional[bool] = None


# ─── 필드 검증 ───


def _clean_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Please provide a title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title cannot be more than {TITLE_MAX_LENGTH} characters")
    return title


def _slug_for(title: str) -> str:
    slug = derive_slug(title)
    if not slug:
        raise ValidationError("Title must contain at least one letter or digit")
    return slug


def _clean_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise ValidationError("Please provide content")
    return content


def _clean_excerpt(excerpt: str | None) -> str | None:
    if excerpt is None:
        return None
    excerpt = excerpt.strip()
    if len(excerpt) > EXCERPT_MAX_LENGTH:
        raise ValidationError(f"Excerpt cannot be more than {EXCERPT_MAX_LENGTH} characters")
    return excerpt or None


def _clean_tags(tags: list[str]) -> list[str]:
    cleaned = (t.strip() for t in tags)
    return list(dict.fromkeys(t for t in cleaned if t))


async def _require_category(category_repo: CategoryRepository, category_id: str | None) -> str:
    category_id = (category_id or "").strip()
    if not category_id:
        raise ValidationError("Please provide a category")
    if await category_repo.get_by_id(category_id) is None:
        raise CategoryNotFoundError(category_id)
    return category_id


async def _load(post_repo: PostRepository, post_id: str) -> Post:
    post = await post_repo.get_by_id(post_id)
    if post is None:
        raise PostNotFoundError(post_id)
    return post


class CreatePostUseCase:
    def __init__(
        self,
        post_repo: PostRepository,
        category_repo: CategoryRepository,
        asset_store: AssetStore,
    ):
        self._post_repo = post_repo
        self._category_repo = category_repo
        self._asset_store = asset_store

    async def execute(self, actor: Actor, draft: PostDraft, image: ImageUpload | None) -> Post:
        if image is None or not image.data:
            raise ValidationError("Image is required")

        title = _clean_title(draft.title)
        post = Post(
            title=title,
            slug=_slug_for(title),
            content=_clean_content(draft.content),
            category_id=await _require_category(self._category_repo, draft.category_id),
            excerpt=_clean_excerpt(draft.excerpt),
            tags=_clean_tags(draft.tags),
            is_published=draft.is_published,
            author_id=actor.id,
            image="",
        )

        post.image = await self._asset_store.save(image, actor.id)
        try:
            post = await self._post_repo.add(post)
        except DomainError:
            # 저장 실패 시 방금 올린 이미지를 되돌린다
            await self._asset_store.delete(post.image)
            raise

        logger.info(f"게시물 생성: id={post.id} slug='{post.slug}' author={actor.id}")
        return post


class GetPostUseCase:
    def __init__(
        self,
        post_repo: PostRepository,
        category_repo: CategoryRepository,
        user_repo: UserRepository,
    ):
        self._post_repo = post_repo
        self._category_repo = category_repo
        self._user_repo = user_repo

    async def execute(self, post_id: str) -> PostView:
        post = await _load(self._post_repo, post_id)
        [view] = await resolve_views([post], self._category_repo, self._user_repo)
        return view


class UpdatePostUseCase:
    def __init__(
        self,
        post_repo: PostRepository,
        category_repo: CategoryRepository,
        asset_store: AssetStore,
    ):
        self._post_repo = post_repo
        self._category_repo = category_repo
        self._asset_store = asset_store

    async def execute(
        self,
        post_id: str,
        actor: Actor,
        patch: PostPatch,
        image: ImageUpload | None = None,
    ) -> Post:
        post = await _load(self._post_repo, post_id)
        ensure_can_mutate(actor, post.author_id, "post")

        if patch.title is not None:
            title = _clean_title(patch.title)
            if title != post.title:
                post.title = title
                post.slug = _slug_for(title)
        if patch.content is not None:
            post.content = _clean_content(patch.content)
        if patch.category_id is not None and patch.category_id != post.category_id:
            post.category_id = await _require_category(self._category_repo, patch.category_id)
        if patch.excerpt is not None:
            post.excerpt = _clean_excerpt(patch.excerpt)
        if patch.tags is not None:
            post.tags = _clean_tags(patch.tags)
        if patch.is_published is not None:
            post.is_published = patch.is_published

        new_image = None
        if image is not None and image.data:
            new_image = await self._asset_store.save(image, actor.id)
            post.image = new_image

        try:
            post = await self._post_repo.save(post)
        except DomainError:
            if new_image:
                await self._asset_store.delete(new_image)
            raise

        logger.info(f"게시물 수정: id={post.id} by={actor.id} version={post.version}")
        return post


class DeletePostUseCase:
    def __init__(self, post_repo: PostRepository):
        self._post_repo = post_repo

    async def execute(self, post_id: str, actor: Actor) -> None:
        post = await _load(self._post_repo, post_id)
        ensure_can_mutate(actor, post.author_id, "post")
        if not await self._post_repo.delete(post_id):
            raise PostNotFoundError(post_id)
        logger.info(f"게시물 삭제: id={post_id} by={actor.id}")


class RecordViewUseCase:
    """조회수 1 증가. 인증 없이 호출되며 애그리거트 version을 올리지 않는다."""

    def __init__(self, post_repo: PostRepository):
        self._post_repo = post_repo

    async def execute(self, post_id: str) -> int:
        return await self._post_repo.increment_views(post_id)
