"""CategoryRepository — Firebase Firestore 구현.

Firestore 컬렉션: 'categories'
문서 ID: 카테고리 id (이름에서 파생된 슬러그, 예: 'web-development')
"""

from __future__ import annotations

import asyncio
import logging

from google.api_core.exceptions import AlreadyExists, GoogleAPICallError

from inkwell.domain.entities import Category
from inkwell.domain.exceptions import CategoryConflictError, PersistenceError

logger = logging.getLogger(__name__)


def _category_to_dict(category: Category) -> dict:
    return {
        "name": category.name,
        "description": category.description,
    }


def _category_from_doc(doc) -> Category:
    d = doc.to_dict()
    return Category(
        id=doc.id,
        name=d.get("name", doc.id),
        description=d.get("description"),
    )


class FirestoreCategoryRepository:
    COLLECTION = "categories"

    def __init__(self, db):
        self._db = db

    def _col(self):
        return self._db.collection(self.COLLECTION)

    async def _run(self, operation: str, fn):
        try:
            return await asyncio.to_thread(fn)
        except GoogleAPICallError as e:
            logger.error(f"Firestore 카테고리 {operation} 실패: {e}")
            raise PersistenceError(f"Category store {operation} failed") from e

    async def get_all(self) -> list[Category]:
        def _get():
            return [_category_from_doc(d) for d in self._col().stream()]

        return await self._run("read", _get)

    async def get_by_id(self, category_id: str) -> Category | None:
        def _get():
            doc = self._col().document(category_id).get()
            return _category_from_doc(doc) if doc.exists else None

        return await self._run("read", _get)

    async def add(self, category: Category) -> Category:
        def _add():
            try:
                self._col().document(category.id).create(_category_to_dict(category))
            except AlreadyExists as e:
                raise CategoryConflictError(category.id) from e
            return category

        return await self._run("add", _add)

    async def upsert(self, category: Category) -> Category:
        def _upsert():
            self._col().document(category.id).set(_category_to_dict(category))
            return category

        return await self._run("upsert", _upsert)

    async def delete(self, category_id: str) -> bool:
        def _delete():
            doc_ref = self._col().document(category_id)
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
            return True

        return await self._run("delete", _delete)
