"""Discussion use cases: 로드 → 변경 → 애그리거트 전체 저장.

Invariants:
    - 저장 실패 시 저장된 애그리거트는 변하지 않는다
    - 동시 변경은 StaleAggregateError로 드러난다 (재시도 없음)
    - 표시 이름: 토큰 username → 사용자 디렉터리 → 'Unknown'
"""

import pytest

from conftest import ADMIN, ALICE, BOB
from inkwell.application.use_cases.manage_discussion import AddCommentUseCase
from inkwell.application.use_cases.manage_posts import PostPatch
from inkwell.domain.entities import Actor, User
from inkwell.domain.exceptions import (
    CommentNotFoundError,
    ForbiddenError,
    PersistenceError,
    PostNotFoundError,
    StaleAggregateError,
    ValidationError,
)
from inkwell.domain.services import discussion


async def test_scenario_owner_commenter_admin(container, alice_post):
    """A가 글 작성 → B가 댓글 → A는 글 수정 가능 → B는 글 수정 불가 → 관리자는 B의 댓글 삭제 가능."""
    comment = await container.add_comment_use_case().execute(alice_post.id, BOB, "Nice post")

    updated = await container.update_post_use_case().execute(
        alice_post.id, ALICE, PostPatch(content="Edited by owner")
    )
    assert updated.content == "Edited by owner"
    assert updated.latest_comment.id == comment.id

    with pytest.raises(ForbiddenError):
        await container.update_post_use_case().execute(alice_post.id, BOB, PostPatch(content="nope"))

    await container.remove_comment_use_case().execute(alice_post.id, comment.id, ADMIN)
    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.comments == []
    assert stored.content == "Edited by owner"


async def test_add_comment_persists_whole_aggregate(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, BOB, "first")
    stored = await container.post_repo.get_by_id(alice_post.id)
    assert [c.id for c in stored.comments] == [comment.id]
    assert stored.comments[0].username == "bob"
    assert stored.version == alice_post.version + 1


async def test_comment_on_missing_post(container):
    with pytest.raises(PostNotFoundError):
        await container.add_comment_use_case().execute("missing", BOB, "hi")


async def test_empty_comment_rejected(container, alice_post):
    with pytest.raises(ValidationError):
        await container.add_comment_use_case().execute(alice_post.id, BOB, "")


async def test_display_name_falls_back_to_user_directory(container, alice_post):
    anonymous_token_actor = Actor(id=BOB.id)
    comment = await container.add_comment_use_case().execute(alice_post.id, anonymous_token_actor, "hi")
    assert comment.username == "bob"


async def test_display_name_unknown_when_user_missing(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, Actor(id="ghost"), "boo")
    assert comment.username == "Unknown"


async def test_display_name_is_a_snapshot(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, Actor(id=BOB.id), "hi")
    container.user_repo.put(User(id=BOB.id, username="robert"))

    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.find_comment(comment.id).username == "bob"


async def test_edit_and_remove_comment_by_non_owner_forbidden(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, BOB, "mine")

    with pytest.raises(ForbiddenError):
        await container.edit_comment_use_case().execute(alice_post.id, comment.id, ALICE, "x")
    with pytest.raises(ForbiddenError):
        await container.remove_comment_use_case().execute(alice_post.id, comment.id, ALICE)

    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.find_comment(comment.id).content == "mine"


async def test_edit_comment_by_owner(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, BOB, "old")
    edited = await container.edit_comment_use_case().execute(alice_post.id, comment.id, BOB, "new")

    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.find_comment(comment.id).content == "new"
    assert edited.created_at == comment.created_at
    assert edited.updated_at >= comment.updated_at


async def test_reply_lifecycle(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, BOB, "question")
    reply = await container.add_reply_use_case().execute(alice_post.id, comment.id, ALICE, "answer")

    await container.edit_reply_use_case().execute(alice_post.id, comment.id, reply.id, ALICE, "better answer")
    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.find_comment(comment.id).find_reply(reply.id).content == "better answer"

    await container.remove_reply_use_case().execute(alice_post.id, comment.id, reply.id, ALICE)
    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.find_comment(comment.id).replies == []


async def test_reply_to_missing_comment(container, alice_post):
    with pytest.raises(CommentNotFoundError):
        await container.add_reply_use_case().execute(alice_post.id, "missing", BOB, "hi")


async def test_remove_comment_cascades_replies_in_store(container, alice_post):
    comment = await container.add_comment_use_case().execute(alice_post.id, BOB, "parent")
    for i in range(3):
        await container.add_reply_use_case().execute(alice_post.id, comment.id, ALICE, f"r{i}")

    await container.remove_comment_use_case().execute(alice_post.id, comment.id, BOB)

    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.find_comment(comment.id) is None
    assert all(not c.replies for c in stored.comments)


async def test_concurrent_writers_second_save_is_stale(container, alice_post):
    first = await container.post_repo.get_by_id(alice_post.id)
    second = await container.post_repo.get_by_id(alice_post.id)

    discussion.append_comment(first, ALICE, "one", "alice")
    discussion.append_comment(second, BOB, "two", "bob")
    await container.post_repo.save(first)

    with pytest.raises(StaleAggregateError):
        await container.post_repo.save(second)

    stored = await container.post_repo.get_by_id(alice_post.id)
    assert [c.content for c in stored.comments] == ["one"]


class _FailingSaveRepo:
    """save만 실패하는 저장소 래퍼."""

    def __init__(self, inner):
        self._inner = inner

    async def get_by_id(self, post_id):
        return await self._inner.get_by_id(post_id)

    async def save(self, post):
        raise PersistenceError("disk on fire")


async def test_failed_save_leaves_stored_aggregate_unchanged(container, alice_post):
    uc = AddCommentUseCase(_FailingSaveRepo(container.post_repo), container.user_repo)

    with pytest.raises(PersistenceError):
        await uc.execute(alice_post.id, BOB, "lost")

    stored = await container.post_repo.get_by_id(alice_post.id)
    assert stored.comments == []
    assert stored.version == alice_post.version
