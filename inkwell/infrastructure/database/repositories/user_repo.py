"""UserRepository — Firebase Firestore 구현 (읽기 전용).

Firestore 컬렉션: 'users' (외부 인증 서비스가 기록)
"""

from __future__ import annotations

import asyncio
import logging

from google.api_core.exceptions import GoogleAPICallError

from inkwell.domain.entities import User
from inkwell.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def _user_from_doc(doc) -> User:
    d = doc.to_dict()
    return User(
        id=doc.id,
        username=d.get("username", "Unknown"),
        name=d.get("name"),
        email=d.get("email"),
    )


class FirestoreUserRepository:
    COLLECTION = "users"

    def __init__(self, db):
        self._db = db

    def _col(self):
        return self._db.collection(self.COLLECTION)

    async def get_by_id(self, user_id: str) -> User | None:
        def _get():
            doc = self._col().document(user_id).get()
            return _user_from_doc(doc) if doc.exists else None

        try:
            return await asyncio.to_thread(_get)
        except GoogleAPICallError as e:
            logger.error(f"Firestore 사용자 조회 실패: {e}")
            raise PersistenceError("User store read failed") from e

    async def get_many(self, user_ids: list[str]) -> dict[str, User]:
        def _get_many():
            refs = [self._col().document(uid) for uid in dict.fromkeys(user_ids)]
            if not refs:
                return {}
            return {
                doc.id: _user_from_doc(doc)
                for doc in self._db.get_all(refs)
                if doc.exists
            }

        try:
            return await asyncio.to_thread(_get_many)
        except GoogleAPICallError as e:
            logger.error(f"Firestore 사용자 일괄 조회 실패: {e}")
            raise PersistenceError("User store read failed") from e
