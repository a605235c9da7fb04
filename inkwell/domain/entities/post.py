from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

TITLE_MAX_LENGTH = 100
EXCERPT_MAX_LENGTH = 200


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Reply:
    """댓글에 달린 답글. 자식을 갖지 않는다."""

    user_id: str
    username: str
    content: str

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class Comment:
    """게시물에 포함된 댓글.

    username은 작성 시점의 표시 이름 스냅샷이며, 이후 사용자가 이름을 바꿔도 갱신하지 않는다.
    """

    user_id: str
    username: str
    content: str

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    replies: list[Reply] = field(default_factory=list)

    def find_reply(self, reply_id: str) -> Reply | None:
        return next((r for r in self.replies if r.id == reply_id), None)


@dataclass
class Post:
    """게시물 애그리거트 루트. 댓글/답글을 내장하며 통째로 저장된다."""

    title: str
    content: str
    image: str
    slug: str
    category_id: str

    id: Optional[str] = None
    excerpt: Optional[str] = None
    author_id: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    is_published: bool = False
    view_count: int = 0
    comments: list[Comment] = field(default_factory=list)

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # 낙관적 동시성 카운터 (0 = 아직 저장되지 않음)
    version: int = 0

    @property
    def url(self) -> str:
        return f"/posts/{self.slug}"

    @property
    def latest_comment(self) -> Comment | None:
        return self.comments[-1] if self.comments else None

    def find_comment(self, comment_id: str) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)
