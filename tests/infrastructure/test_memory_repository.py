"""InMemoryPostRepository: 버전 검사와 복사본 격리."""

import pytest

from inkwell.domain.entities import Post, User
from inkwell.domain.exceptions import PostNotFoundError, SlugConflictError, StaleAggregateError
from inkwell.infrastructure.database.memory import InMemoryPostRepository, InMemoryUserRepository


def _post(slug="a", title="A"):
    return Post(title=title, content="c", image="i.png", slug=slug, category_id="general")


@pytest.fixture
def repo():
    return InMemoryPostRepository()


async def test_add_assigns_id_and_version(repo):
    post = await repo.add(_post())
    assert post.id
    assert post.version == 1


async def test_reads_are_isolated_copies(repo):
    post = await repo.add(_post())
    loaded = await repo.get_by_id(post.id)
    loaded.title = "mutated"
    post.title = "also mutated"

    again = await repo.get_by_id(post.id)
    assert again.title == "A"


async def test_save_bumps_version_and_updated_at(repo):
    post = await repo.add(_post())
    before = post.updated_at
    loaded = await repo.get_by_id(post.id)
    loaded.content = "changed"

    saved = await repo.save(loaded)
    assert saved.version == 2
    assert saved.updated_at >= before
    assert (await repo.get_by_id(post.id)).content == "changed"


async def test_stale_save_rejected(repo):
    post = await repo.add(_post())
    stale = await repo.get_by_id(post.id)
    fresh = await repo.get_by_id(post.id)
    await repo.save(fresh)

    with pytest.raises(StaleAggregateError) as exc_info:
        await repo.save(stale)
    assert exc_info.value.http_status == 409


async def test_save_missing_post(repo):
    ghost = _post()
    ghost.id = "nope"
    with pytest.raises(PostNotFoundError):
        await repo.save(ghost)


async def test_slug_uniqueness_on_add_and_save(repo):
    await repo.add(_post("taken"))
    with pytest.raises(SlugConflictError):
        await repo.add(_post("taken"))

    other = await repo.add(_post("free"))
    other.slug = "taken"
    with pytest.raises(SlugConflictError):
        await repo.save(other)
    assert (await repo.get_by_id(other.id)).slug == "free"


async def test_delete_reports_existence(repo):
    post = await repo.add(_post())
    assert await repo.delete(post.id) is True
    assert await repo.delete(post.id) is False


async def test_search_slices_after_filtering(repo):
    for i in range(5):
        await repo.add(_post(f"s{i}", title=f"Match {i}" if i % 2 == 0 else f"Other {i}"))

    assert await repo.count(title_contains="match") == 3
    page = await repo.search(title_contains="match", limit=2, offset=1)
    assert [p.title for p in page] == ["Match 2", "Match 4"]


async def test_user_directory_get_many_skips_unknown():
    users = InMemoryUserRepository([User(id="u1", username="one")])
    found = await users.get_many(["u1", "u2"])
    assert list(found) == ["u1"]
