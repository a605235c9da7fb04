from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings


# ──────────────────────────────────────────
# 환경변수 기반 시크릿 설정 (.env)
# ──────────────────────────────────────────
class Settings(BaseSettings):
    # 외부 인증 서비스와 공유하는 토큰 서명 키
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"

    # 'firestore' | 'memory'
    storage_backend: str = "firestore"

    # Firebase
    firebase_credential_path: str = "firebase-service-account.json"
    firebase_project_id: str = ""
    firebase_storage_bucket: str = ""

    # firebase_storage_bucket이 비어 있으면 로컬 디렉터리에 이미지 저장
    upload_dir: str = "uploads"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# ──────────────────────────────────────────
# YAML 기반 앱 설정 (config/settings.yaml)
# ──────────────────────────────────────────
class ListingConfig:
    def __init__(self, data: dict[str, Any]):
        self.default_page_size: int = data.get("default_page_size", 10)
        self.max_page_size: int = data.get("max_page_size", 50)


class UploadConfig:
    def __init__(self, data: dict[str, Any]):
        self.max_image_kb: int = data.get("max_image_kb", 600)
        self.allowed_content_types: list[str] = data.get("allowed_content_types", [
            "image/jpeg", "image/png", "image/gif", "image/webp",
        ])

    @property
    def max_image_bytes(self) -> int:
        return self.max_image_kb * 1024


class CategoryConfig:
    def __init__(self, data: dict[str, Any]):
        self.name: str = data["name"]
        self.description: str | None = data.get("description")


class WebConfig:
    def __init__(self, data: dict[str, Any]):
        self.host: str = data.get("host", "0.0.0.0")
        self.port: int = data.get("port", 8000)


class AppConfig:
    """YAML에서 로드된 전체 앱 설정."""

    def __init__(self, data: dict[str, Any]):
        self.name: str = data.get("app", {}).get("name", "Inkwell")

        self.categories: list[CategoryConfig] = [
            CategoryConfig(c) for c in data.get("categories", [])
        ]

        self.listing = ListingConfig(data.get("listing", {}))
        self.uploads = UploadConfig(data.get("uploads", {}))
        self.web = WebConfig(data.get("web", {}))


def load_app_config(path: str = "config/settings.yaml") -> AppConfig:
    """YAML 설정 파일을 로드하여 AppConfig를 반환."""
    config_path = Path(path)
    if not config_path.exists():
        return AppConfig({})
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(data)
