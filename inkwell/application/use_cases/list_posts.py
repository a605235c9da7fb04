"""유즈케이스: 게시물 목록 (검색 + 카테고리 필터 + 페이지네이션).

각 항목에는 카테고리/작성자가 풀려서 붙고, latest_comment는 댓글 배열의 마지막 원소다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from inkwell.application.use_cases.post_views import PostView, resolve_views
from inkwell.domain.exceptions import ValidationError
from inkwell.domain.repositories.category_repository import CategoryRepository
from inkwell.domain.repositories.post_repository import PostRepository
from inkwell.domain.repositories.user_repository import UserRepository

DEFAULT_PAGE_SIZE = 10


@dataclass
class PostFilter:
    title_contains: Optional[str] = None
    category_id: Optional[str] = None


@dataclass
class PostPage:
    items: list[PostView]
    total: int
    page: int
    pages: int


class ListPostsUseCase:
    def __init__(
        self,
        post_repo: PostRepository,
        category_repo: CategoryRepository,
        user_repo: UserRepository,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = 50,
    ):
        self._post_repo = post_repo
        self._category_repo = category_repo
        self._user_repo = user_repo
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def execute(
        self,
        post_filter: PostFilter | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> PostPage:
        post_filter = post_filter or PostFilter()
        page_size = page_size or self._default_page_size
        if page < 1:
            raise ValidationError("page must be 1 or greater")
        if page_size < 1 or page_size > self._max_page_size:
            raise ValidationError(f"limit must be between 1 and {self._max_page_size}")

        title = post_filter.title_contains or None
        category = post_filter.category_id or None

        posts = await self._post_repo.search(
            title_contains=title,
            category_id=category,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        total = await self._post_repo.count(title_contains=title, category_id=category)
        items = await resolve_views(posts, self._category_repo, self._user_repo)

        return PostPage(
            items=items,
            total=total,
            page=page,
            pages=math.ceil(total / page_size),
        )
