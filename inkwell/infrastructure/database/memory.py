"""인메모리 저장소 구현 (storage_backend=memory).

로컬 개발과 테스트용. Firestore 구현과 같은 계약을 지킨다:
- 읽기/쓰기 모두 깊은 복사본을 주고받으므로 저장 실패 시 저장된 애그리거트는 그대로 남는다.
- 버전 비교와 슬러그 중복 검사는 asyncio.Lock 안에서 원자적으로 수행한다.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import uuid

from inkwell.domain.entities import Category, Post, User
from inkwell.domain.entities.post import utcnow
from inkwell.domain.exceptions import (
    CategoryConflictError,
    PostNotFoundError,
    SlugConflictError,
    StaleAggregateError,
)

logger = logging.getLogger(__name__)


class InMemoryPostRepository:
    def __init__(self):
        self._posts: dict[str, Post] = {}
        self._lock = asyncio.Lock()

    def _slug_taken(self, slug: str, exclude_id: str | None) -> bool:
        return any(p.slug == slug and pid != exclude_id for pid, p in self._posts.items())

    async def add(self, post: Post) -> Post:
        async with self._lock:
            if self._slug_taken(post.slug, None):
                raise SlugConflictError(post.slug)
            post.id = uuid.uuid4().hex
            post.version = 1
            self._posts[post.id] = copy.deepcopy(post)
            return post

    async def get_by_id(self, post_id: str) -> Post | None:
        stored = self._posts.get(post_id)
        return copy.deepcopy(stored) if stored else None

    async def save(self, post: Post) -> Post:
        async with self._lock:
            stored = self._posts.get(post.id)
            if stored is None:
                raise PostNotFoundError(post.id)
            if stored.version != post.version:
                logger.warning(f"버전 충돌: post={post.id} expected={post.version} actual={stored.version}")
                raise StaleAggregateError(post.id, post.version, stored.version)
            if stored.slug != post.slug and self._slug_taken(post.slug, post.id):
                raise SlugConflictError(post.slug)
            # 조회수는 increment_views만 바꾼다
            post.view_count = stored.view_count
            post.updated_at = utcnow()
            post.version += 1
            self._posts[post.id] = copy.deepcopy(post)
            return post

    async def increment_views(self, post_id: str) -> int:
        async with self._lock:
            stored = self._posts.get(post_id)
            if stored is None:
                raise PostNotFoundError(post_id)
            stored.view_count += 1
            return stored.view_count

    async def delete(self, post_id: str) -> bool:
        async with self._lock:
            return self._posts.pop(post_id, None) is not None

    def _matching(self, title_contains: str | None, category_id: str | None) -> list[Post]:
        # dict는 삽입 순서를 유지하므로 생성 순서 그대로
        posts = list(self._posts.values())
        if category_id:
            posts = [p for p in posts if p.category_id == category_id]
        if title_contains:
            needle = title_contains.lower()
            posts = [p for p in posts if needle in p.title.lower()]
        return posts

    async def search(
        self,
        title_contains: str | None = None,
        category_id: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        posts = self._matching(title_contains, category_id)[offset : offset + limit]
        return copy.deepcopy(posts)

    async def count(
        self,
        title_contains: str | None = None,
        category_id: str | None = None,
    ) -> int:
        return len(self._matching(title_contains, category_id))


class InMemoryCategoryRepository:
    def __init__(self):
        self._categories: dict[str, Category] = {}

    async def get_all(self) -> list[Category]:
        return [copy.copy(c) for c in self._categories.values()]

    async def get_by_id(self, category_id: str) -> Category | None:
        stored = self._categories.get(category_id)
        return copy.copy(stored) if stored else None

    async def add(self, category: Category) -> Category:
        if category.id in self._categories:
            raise CategoryConflictError(category.id)
        self._categories[category.id] = copy.copy(category)
        return category

    async def upsert(self, category: Category) -> Category:
        self._categories[category.id] = copy.copy(category)
        return category

    async def delete(self, category_id: str) -> bool:
        return self._categories.pop(category_id, None) is not None


class InMemoryUserRepository:
    """사용자 디렉터리. 외부 시스템 대신 put()으로 레코드를 채운다."""

    def __init__(self, users: list[User] | None = None):
        self._users: dict[str, User] = {u.id: u for u in users or []}

    def put(self, user: User) -> None:
        self._users[user.id] = user

    async def get_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        return {uid: self._users[uid] for uid in user_ids if uid in self._users}
