"""AssetStore — Firebase Storage 구현.

업로드한 이미지를 'post_images/{owner_id}/{uuid}.{ext}' 경로에 저장하고
그 경로(blob 이름)를 참조로 반환한다.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

from google.api_core.exceptions import GoogleAPICallError, NotFound

from inkwell.domain.exceptions import PersistenceError
from inkwell.domain.services.asset_store import ImageUpload

logger = logging.getLogger(__name__)


class FirebaseAssetStore:
    FOLDER = "post_images"

    def __init__(self, bucket):
        self._bucket = bucket

    async def save(self, upload: ImageUpload, owner_id: str) -> str:
        extension = upload.filename.rsplit(".", 1)[-1] if "." in upload.filename else ""
        blob_name = f"{self.FOLDER}/{owner_id}/{uuid.uuid4().hex}"
        if extension:
            blob_name = f"{blob_name}.{extension}"

        def _upload():
            blob = self._bucket.blob(blob_name)
            blob.upload_from_string(upload.data, content_type=upload.content_type)
            return blob_name

        try:
            reference = await asyncio.to_thread(_upload)
        except GoogleAPICallError as e:
            logger.error(f"이미지 업로드 실패 ({upload.filename}): {e}")
            raise PersistenceError("Image upload failed") from e
        logger.info(f"이미지 업로드: {upload.filename} → gs://{self._bucket.name}/{reference}")
        return reference

    async def delete(self, reference: str) -> None:
        def _delete():
            self._bucket.blob(reference).delete()

        try:
            await asyncio.to_thread(_delete)
        except NotFound:
            logger.warning(f"삭제할 이미지가 없음: {reference}")
        except GoogleAPICallError as e:
            logger.error(f"이미지 삭제 실패 ({reference}): {e}")
            raise PersistenceError("Image delete failed") from e
