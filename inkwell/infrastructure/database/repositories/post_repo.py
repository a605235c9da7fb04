"""PostRepository — Firebase Firestore 구현.

Firestore 컬렉션: 'posts'
문서 ID: 자동 생성 ID, 슬러그 예약: 'post_slugs'
댓글/답글은 문서 안에 맵 배열로 내장된다. 'version' 필드로 낙관적 동시성을 검사하며,
읽기-비교-쓰기는 Firestore 트랜잭션 안에서 수행한다.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, TypeVar

from firebase_admin import firestore
from google.api_core.exceptions import GoogleAPICallError, NotFound

from inkwell.domain.entities import Comment, Post, Reply
from inkwell.domain.entities.post import utcnow
from inkwell.domain.exceptions import (
    PersistenceError,
    PostNotFoundError,
    SlugConflictError,
    StaleAggregateError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ─── 도메인 엔티티 ↔ Firestore 문서 변환 ───


def _reply_to_dict(reply: Reply) -> dict[str, Any]:
    return {
        "id": reply.id,
        "user_id": reply.user_id,
        "username": reply.username,
        "content": reply.content,
        "created_at": reply.created_at,
        "updated_at": reply.updated_at,
    }


def _comment_to_dict(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "user_id": comment.user_id,
        "username": comment.username,
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        "replies": [_reply_to_dict(r) for r in comment.replies],
    }


def _post_to_dict(post: Post) -> dict[str, Any]:
    return {
        "title": post.title,
        "content": post.content,
        "image": post.image,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "author_id": post.author_id,
        "category_id": post.category_id,
        "tags": post.tags,
        "is_published": post.is_published,
        "view_count": post.view_count,
        "comments": [_comment_to_dict(c) for c in post.comments],
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "version": post.version,
    }


def _reply_from_dict(d: dict[str, Any]) -> Reply:
    return Reply(
        id=d["id"],
        user_id=d.get("user_id", ""),
        username=d.get("username", "Unknown"),
        content=d.get("content", ""),
        created_at=d.get("created_at"),
        updated_at=d.get("updated_at"),
    )


def _comment_from_dict(d: dict[str, Any]) -> Comment:
    return Comment(
        id=d["id"],
        user_id=d.get("user_id", ""),
        username=d.get("username", "Unknown"),
        content=d.get("content", ""),
        created_at=d.get("created_at"),
        updated_at=d.get("updated_at"),
        replies=[_reply_from_dict(r) for r in d.get("replies", [])],
    )


def _post_from_doc(doc) -> Post:
    d = doc.to_dict()
    return Post(
        id=doc.id,
        title=d.get("title", ""),
        content=d.get("content", ""),
        image=d.get("image", ""),
        slug=d.get("slug", ""),
        excerpt=d.get("excerpt"),
        author_id=d.get("author_id"),
        category_id=d.get("category_id", ""),
        tags=d.get("tags", []),
        is_published=d.get("is_published", False),
        view_count=d.get("view_count", 0),
        comments=[_comment_from_dict(c) for c in d.get("comments", [])],
        created_at=d.get("created_at"),
        updated_at=d.get("updated_at"),
        version=d.get("version", 1),
    )


def _title_matches(post: Post, title_contains: str | None) -> bool:
    if not title_contains:
        return True
    return title_contains.lower() in post.title.lower()


def _slug_key(slug: str) -> str:
    # '__x__' 형태의 예약 문서 ID를 피하기 위한 접두사
    return f"slug:{slug}"


class FirestorePostRepository:
    """Firestore 기반 PostRepository 구현.

    슬러그 유일성은 'post_slugs/slug:{slug}' 예약 문서로 보장한다. 예약 문서는 게시물과
    같은 트랜잭션에서 생성/이동/삭제되므로 두 게시물이 같은 슬러그를 가질 수 없다.
    """

    COLLECTION = "posts"
    SLUG_COLLECTION = "post_slugs"

    def __init__(self, db):
        self._db = db

    def _col(self):
        return self._db.collection(self.COLLECTION)

    def _slug_ref(self, slug: str):
        return self._db.collection(self.SLUG_COLLECTION).document(_slug_key(slug))

    async def _run(self, operation: str, fn: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(fn)
        except GoogleAPICallError as e:
            logger.error(f"Firestore {operation} 실패: {e}")
            raise PersistenceError(f"Post store {operation} failed") from e

    @staticmethod
    def _slug_owner(transaction, slug_ref) -> str | None:
        snapshot = slug_ref.get(transaction=transaction)
        return snapshot.to_dict().get("post_id") if snapshot.exists else None

    async def add(self, post: Post) -> Post:
        def _add():
            doc_ref = self._col().document()
            slug_ref = self._slug_ref(post.slug)

            @firestore.transactional
            def _txn(transaction):
                if self._slug_owner(transaction, slug_ref) is not None:
                    raise SlugConflictError(post.slug)
                transaction.create(slug_ref, {"post_id": doc_ref.id})
                transaction.create(doc_ref, {**_post_to_dict(post), "version": 1})

            _txn(self._db.transaction())
            post.id = doc_ref.id
            post.version = 1
            return post

        return await self._run("add", _add)

    async def get_by_id(self, post_id: str) -> Post | None:
        def _get():
            doc = self._col().document(post_id).get()
            return _post_from_doc(doc) if doc.exists else None

        return await self._run("read", _get)

    async def save(self, post: Post) -> Post:
        def _save():
            doc_ref = self._col().document(post.id)
            updated_at = utcnow()

            @firestore.transactional
            def _txn(transaction):
                # 트랜잭션 안에서는 모든 읽기가 쓰기보다 먼저
                snapshot = doc_ref.get(transaction=transaction)
                if not snapshot.exists:
                    raise PostNotFoundError(post.id)
                stored = snapshot.to_dict()
                stored_version = stored.get("version", 1)
                if stored_version != post.version:
                    logger.warning(
                        f"버전 충돌: post={post.id} expected={post.version} actual={stored_version}"
                    )
                    raise StaleAggregateError(post.id, post.version, stored_version)

                old_slug = stored.get("slug")
                new_slug_ref = None
                if old_slug != post.slug:
                    new_slug_ref = self._slug_ref(post.slug)
                    if self._slug_owner(transaction, new_slug_ref) not in (None, post.id):
                        raise SlugConflictError(post.slug)

                data = _post_to_dict(post)
                data["view_count"] = stored.get("view_count", 0)
                data["updated_at"] = updated_at
                data["version"] = post.version + 1
                if new_slug_ref is not None:
                    transaction.set(new_slug_ref, {"post_id": post.id})
                    if old_slug:
                        transaction.delete(self._slug_ref(old_slug))
                transaction.set(doc_ref, data)
                return data["view_count"]

            view_count = _txn(self._db.transaction())
            post.view_count = view_count
            post.updated_at = updated_at
            post.version += 1
            return post

        return await self._run("save", _save)

    async def increment_views(self, post_id: str) -> int:
        def _increment():
            doc_ref = self._col().document(post_id)
            try:
                doc_ref.update({"view_count": firestore.Increment(1)})
            except NotFound as e:
                raise PostNotFoundError(post_id) from e
            return doc_ref.get(field_paths=["view_count"]).to_dict().get("view_count", 0)

        return await self._run("increment views", _increment)

    async def delete(self, post_id: str) -> bool:
        def _delete():
            doc_ref = self._col().document(post_id)

            @firestore.transactional
            def _txn(transaction):
                snapshot = doc_ref.get(transaction=transaction)
                if not snapshot.exists:
                    return False
                slug = snapshot.to_dict().get("slug")
                slug_ref = self._slug_ref(slug) if slug else None
                owns_slug = slug_ref is not None and self._slug_owner(transaction, slug_ref) == post_id
                if owns_slug:
                    transaction.delete(slug_ref)
                transaction.delete(doc_ref)
                return True

            return _txn(self._db.transaction())

        return await self._run("delete", _delete)

    def _listing_query(self, category_id: str | None):
        # category_id + created_at 복합 색인 필요 (firestore.indexes.json)
        q = self._col()
        if category_id:
            q = q.where("category_id", "==", category_id)
        return q.order_by("created_at")

    def _scan_titles(self, title_contains: str, category_id: str | None) -> list[Post]:
        # Firestore는 부분 문자열 검색을 지원하지 않으므로 제목 검색만 클라이언트에서 필터링
        posts = (_post_from_doc(d) for d in self._listing_query(category_id).stream())
        return [p for p in posts if _title_matches(p, title_contains)]

    async def search(
        self,
        title_contains: str | None = None,
        category_id: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        def _search():
            if title_contains:
                return self._scan_titles(title_contains, category_id)[offset : offset + limit]
            q = self._listing_query(category_id).offset(offset).limit(limit)
            return [_post_from_doc(d) for d in q.stream()]

        return await self._run("search", _search)

    async def count(
        self,
        title_contains: str | None = None,
        category_id: str | None = None,
    ) -> int:
        def _count():
            if title_contains:
                return len(self._scan_titles(title_contains, category_id))
            result = self._listing_query(category_id).count().get()
            return int(result[0][0].value)

        return await self._run("count", _count)
