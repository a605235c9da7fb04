from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class ImageUpload:
    """업로드된 이미지 파일 원본."""

    filename: str
    content_type: str
    data: bytes


class AssetStore(Protocol):
    """바이너리 파일 저장소 인터페이스. 코어는 반환된 참조 문자열만 보관한다."""

    async def save(self, upload: ImageUpload, owner_id: str) -> str:
        """파일을 저장하고 불투명한 참조(파일명/경로)를 반환."""
        ...

    async def delete(self, reference: str) -> None: ...
