"""AssetStore — 로컬 디렉터리 구현.

파일명은 '{timestamp}-{uuid}{ext}' 형식이며, 그 파일명이 참조가 된다.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from pathlib import Path

from inkwell.domain.exceptions import PersistenceError
from inkwell.domain.services.asset_store import ImageUpload

logger = logging.getLogger(__name__)


class LocalAssetStore:
    def __init__(self, upload_dir: str | Path):
        self._dir = Path(upload_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    async def save(self, upload: ImageUpload, owner_id: str) -> str:
        suffix = Path(upload.filename).suffix.lower()
        filename = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{suffix}"

        def _write():
            self._dir.mkdir(parents=True, exist_ok=True)
            (self._dir / filename).write_bytes(upload.data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            logger.error(f"이미지 저장 실패 ({upload.filename}): {e}")
            raise PersistenceError("Image upload failed") from e
        logger.info(f"이미지 저장: {upload.filename} → {filename} (owner={owner_id})")
        return filename

    async def delete(self, reference: str) -> None:
        path = self._dir / Path(reference).name
        try:
            await asyncio.to_thread(lambda: path.unlink(missing_ok=True))
        except OSError as e:
            logger.error(f"이미지 삭제 실패 ({reference}): {e}")
            raise PersistenceError("Image delete failed") from e
