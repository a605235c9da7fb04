from __future__ import annotations

from typing import Protocol

from inkwell.domain.entities import Post


class PostRepository(Protocol):
    """게시물 애그리거트 저장소 인터페이스 (의존성 역전).

    애그리거트는 통째로 읽고 통째로 쓴다. 유일한 부분 업데이트는 조회수 증가다.
    저장소 오류는 PersistenceError로 감싸서 올린다.
    """

    async def add(self, post: Post) -> Post:
        """새 게시물 저장. id를 부여하고 version=1로 만든다.

        슬러그가 이미 사용 중이면 SlugConflictError.
        """
        ...

    async def get_by_id(self, post_id: str) -> Post | None: ...

    async def save(self, post: Post) -> Post:
        """애그리거트 전체를 조건부로 덮어쓴다.

        저장된 version이 post.version과 다르면 StaleAggregateError,
        문서가 사라졌으면 PostNotFoundError, 슬러그가 다른 게시물과 겹치면 SlugConflictError.
        성공 시 post.version이 1 증가한다.
        """
        ...

    async def increment_views(self, post_id: str) -> int:
        """view_count를 원자적으로 1 증가시키고 새 값을 반환.

        version과 updated_at은 바뀌지 않는다. 게시물이 없으면 PostNotFoundError.
        """
        ...

    async def delete(self, post_id: str) -> bool:
        """게시물 하드 삭제. 삭제했으면 True."""
        ...

    async def search(
        self,
        title_contains: str | None = None,
        category_id: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """조건에 맞는 게시물을 생성 순서대로 조회."""
        ...

    async def count(
        self,
        title_contains: str | None = None,
        category_id: str | None = None,
    ) -> int:
        """페이지네이션을 무시한 전체 일치 건수."""
        ...
