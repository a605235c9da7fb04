"""도메인 엔티티 → JSON 응답 변환 (camelCase)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from inkwell.application.use_cases.post_views import PostView
from inkwell.domain.entities import Category, Comment, Post, Reply, User


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def category_json(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
    }


def author_json(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "name": user.name,
        "email": user.email,
    }


def reply_json(reply: Reply) -> dict[str, Any]:
    return {
        "id": reply.id,
        "user": reply.user_id,
        "username": reply.username,
        "content": reply.content,
        "createdAt": _iso(reply.created_at),
        "updatedAt": _iso(reply.updated_at),
    }


def comment_json(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "user": comment.user_id,
        "username": comment.username,
        "content": comment.content,
        "createdAt": _iso(comment.created_at),
        "updatedAt": _iso(comment.updated_at),
        "replies": [reply_json(r) for r in comment.replies],
    }


def post_json(post: Post) -> dict[str, Any]:
    """참조를 풀지 않은 게시물. category/author는 id 문자열."""
    latest = post.latest_comment
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "image": post.image,
        "slug": post.slug,
        "url": post.url,
        "excerpt": post.excerpt,
        "tags": post.tags,
        "isPublished": post.is_published,
        "viewCount": post.view_count,
        "category": post.category_id,
        "author": post.author_id,
        "comments": [comment_json(c) for c in post.comments],
        "latestComment": comment_json(latest) if latest else None,
        "createdAt": _iso(post.created_at),
        "updatedAt": _iso(post.updated_at),
        "version": post.version,
    }


def post_view_json(view: PostView) -> dict[str, Any]:
    """카테고리/작성자를 객체로 풀어낸 게시물. 참조 대상이 사라졌으면 null."""
    data = post_json(view.post)
    data["category"] = category_json(view.category) if view.category else None
    data["author"] = author_json(view.author) if view.author else None
    return data
