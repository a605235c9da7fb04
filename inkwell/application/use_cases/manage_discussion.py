"""유즈케이스: 댓글/답글 추가·수정·삭제.

게시물 애그리거트 전체를 로드 → discussion 도메인 서비스로 변경 → 애그리거트 전체 저장.
저장이 실패하면 메모리상의 변경은 버려지고 저장된 애그리거트는 그대로 남는다.
"""

from __future__ import annotations

import logging

from inkwell.domain.entities import Actor, Comment, Post, Reply
from inkwell.domain.exceptions import PostNotFoundError
from inkwell.domain.repositories.post_repository import PostRepository
from inkwell.domain.repositories.user_repository import UserRepository
from inkwell.domain.services import discussion

logger = logging.getLogger(__name__)

UNKNOWN_USERNAME = "Unknown"


class _DiscussionUseCase:
    def __init__(self, post_repo: PostRepository, user_repo: UserRepository | None = None):
        self._post_repo = post_repo
        self._user_repo = user_repo

    async def _load(self, post_id: str) -> Post:
        post = await self._post_repo.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    async def _display_name(self, actor: Actor) -> str:
        """작성 시점의 표시 이름. 토큰 → 사용자 디렉터리 → 'Unknown' 순."""
        if actor.username:
            return actor.username
        if self._user_repo is not None:
            user = await self._user_repo.get_by_id(actor.id)
            if user is not None:
                return user.username
        return UNKNOWN_USERNAME


# ─── 댓글 ───


class AddCommentUseCase(_DiscussionUseCase):
    async def execute(self, post_id: str, actor: Actor, content: str) -> Comment:
        post = await self._load(post_id)
        comment = discussion.append_comment(post, actor, content, await self._display_name(actor))
        await self._post_repo.save(post)
        logger.info(f"댓글 추가: post={post_id} comment={comment.id} by={actor.id}")
        return comment


class EditCommentUseCase(_DiscussionUseCase):
    async def execute(self, post_id: str, comment_id: str, actor: Actor, content: str) -> Comment:
        post = await self._load(post_id)
        comment = discussion.edit_comment(post, comment_id, actor, content)
        await self._post_repo.save(post)
        logger.info(f"댓글 수정: post={post_id} comment={comment_id} by={actor.id}")
        return comment


class RemoveCommentUseCase(_DiscussionUseCase):
    async def execute(self, post_id: str, comment_id: str, actor: Actor) -> Comment:
        post = await self._load(post_id)
        comment = discussion.remove_comment(post, comment_id, actor)
        await self._post_repo.save(post)
        logger.info(
            f"댓글 삭제: post={post_id} comment={comment_id} by={actor.id} "
            f"(답글 {len(comment.replies)}개 함께 삭제)"
        )
        return comment


# ─── 답글 ───


class AddReplyUseCase(_DiscussionUseCase):
    async def execute(self, post_id: str, comment_id: str, actor: Actor, content: str) -> Reply:
        post = await self._load(post_id)
        reply = discussion.append_reply(
            post, comment_id, actor, content, await self._display_name(actor)
        )
        await self._post_repo.save(post)
        logger.info(f"답글 추가: post={post_id} comment={comment_id} reply={reply.id} by={actor.id}")
        return reply


class EditReplyUseCase(_DiscussionUseCase):
    async def execute(
        self, post_id: str, comment_id: str, reply_id: str, actor: Actor, content: str
    ) -> Reply:
        post = await self._load(post_id)
        reply = discussion.edit_reply(post, comment_id, reply_id, actor, content)
        await self._post_repo.save(post)
        logger.info(f"답글 수정: post={post_id} reply={reply_id} by={actor.id}")
        return reply


class RemoveReplyUseCase(_DiscussionUseCase):
    async def execute(self, post_id: str, comment_id: str, reply_id: str, actor: Actor) -> Reply:
        post = await self._load(post_id)
        reply = discussion.remove_reply(post, comment_id, reply_id, actor)
        await self._post_repo.save(post)
        logger.info(f"답글 삭제: post={post_id} reply={reply_id} by={actor.id}")
        return reply
