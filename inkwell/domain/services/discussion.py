"""게시물 애그리거트 내부의 댓글/답글 트리 조작.

모든 함수는 이미 로드된 Post를 메모리에서만 변경한다. 저장은 호출자(유즈케이스)가
애그리거트 전체를 한 번에 쓰는 방식으로 수행한다.

검사 순서: 내용 검증 → 대상 조회 → 권한 확인.
"""

from __future__ import annotations

from inkwell.domain.entities import Actor, Comment, Post, Reply
from inkwell.domain.entities.post import utcnow
from inkwell.domain.exceptions import (
    CommentNotFoundError,
    ReplyNotFoundError,
    ValidationError,
)
from inkwell.domain.services.authorization import ensure_can_mutate


def _require_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise ValidationError("Content is required")
    return content


def _get_comment(post: Post, comment_id: str) -> Comment:
    comment = post.find_comment(comment_id)
    if comment is None:
        raise CommentNotFoundError(comment_id)
    return comment


def _get_reply(comment: Comment, reply_id: str) -> Reply:
    reply = comment.find_reply(reply_id)
    if reply is None:
        raise ReplyNotFoundError(reply_id)
    return reply


# ─── 댓글 ───


def append_comment(post: Post, actor: Actor, content: str, display_name: str) -> Comment:
    content = _require_content(content)
    now = utcnow()
    comment = Comment(
        user_id=actor.id,
        username=display_name,
        content=content,
        created_at=now,
        updated_at=now,
    )
    post.comments.append(comment)
    return comment


def edit_comment(post: Post, comment_id: str, actor: Actor, content: str) -> Comment:
    content = _require_content(content)
    comment = _get_comment(post, comment_id)
    ensure_can_mutate(actor, comment.user_id, "comment")
    comment.content = content
    comment.updated_at = utcnow()
    return comment


def remove_comment(post: Post, comment_id: str, actor: Actor) -> Comment:
    """댓글을 제거한다. 답글은 댓글에 포함되어 있으므로 함께 사라진다."""
    comment = _get_comment(post, comment_id)
    ensure_can_mutate(actor, comment.user_id, "comment")
    post.comments = [c for c in post.comments if c.id != comment_id]
    return comment


# ─── 답글 ───


def append_reply(
    post: Post, comment_id: str, actor: Actor, content: str, display_name: str
) -> Reply:
    content = _require_content(content)
    comment = _get_comment(post, comment_id)
    now = utcnow()
    reply = Reply(
        user_id=actor.id,
        username=display_name,
        content=content,
        created_at=now,
        updated_at=now,
    )
    comment.replies.append(reply)
    return reply


def edit_reply(
    post: Post, comment_id: str, reply_id: str, actor: Actor, content: str
) -> Reply:
    content = _require_content(content)
    reply = _get_reply(_get_comment(post, comment_id), reply_id)
    ensure_can_mutate(actor, reply.user_id, "reply")
    reply.content = content
    reply.updated_at = utcnow()
    return reply


def remove_reply(post: Post, comment_id: str, reply_id: str, actor: Actor) -> Reply:
    comment = _get_comment(post, comment_id)
    reply = _get_reply(comment, reply_id)
    ensure_can_mutate(actor, reply.user_id, "reply")
    comment.replies = [r for r in comment.replies if r.id != reply_id]
    return reply
