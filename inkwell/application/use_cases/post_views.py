"""표시용 게시물 뷰 — 카테고리/작성자 참조를 풀어서 붙인다."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from inkwell.domain.entities import Category, Comment, Post, User
from inkwell.domain.repositories.category_repository import CategoryRepository
from inkwell.domain.repositories.user_repository import UserRepository


@dataclass
class PostView:
    post: Post
    category: Optional[Category] = None
    author: Optional[User] = None

    @property
    def latest_comment(self) -> Comment | None:
        return self.post.latest_comment


async def resolve_views(
    posts: list[Post],
    category_repo: CategoryRepository,
    user_repo: UserRepository,
) -> list[PostView]:
    """게시물 목록의 카테고리와 작성자를 일괄 조회하여 뷰로 만든다."""
    if not posts:
        return []

    category_ids = {p.category_id for p in posts}
    if len(category_ids) == 1:
        only = await category_repo.get_by_id(next(iter(category_ids)))
        categories = {only.id: only} if only else {}
    else:
        categories = {c.id: c for c in await category_repo.get_all()}

    author_ids = [p.author_id for p in posts if p.author_id]
    authors = await user_repo.get_many(author_ids) if author_ids else {}

    return [
        PostView(
            post=p,
            category=categories.get(p.category_id),
            author=authors.get(p.author_id) if p.author_id else None,
        )
        for p in posts
    ]
