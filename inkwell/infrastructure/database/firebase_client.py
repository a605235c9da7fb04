"""Firebase 연결 — Firestore 클라이언트와 (선택) Storage 버킷."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore, storage

from inkwell.infrastructure.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class FirebaseHandles:
    db: Any
    bucket: Optional[Any] = None


def _credential(path: str | None):
    if path and Path(path).exists():
        return credentials.Certificate(path)
    # GOOGLE_APPLICATION_CREDENTIALS 또는 ADC
    logger.info(f"서비스 계정 키 없음 ({path}), Application Default Credentials 사용")
    return credentials.ApplicationDefault()


def connect_firebase(settings: Settings) -> FirebaseHandles:
    """기본 앱을 한 번만 초기화하고 Firestore/Storage 핸들을 돌려준다.

    firebase_storage_bucket이 비어 있으면 bucket은 None이며, 이미지는 로컬 디렉터리에 저장된다.
    """
    try:
        app = firebase_admin.get_app()
    except ValueError:
        options: dict[str, str] = {}
        if settings.firebase_project_id:
            options["projectId"] = settings.firebase_project_id
        if settings.firebase_storage_bucket:
            options["storageBucket"] = settings.firebase_storage_bucket
        app = firebase_admin.initialize_app(_credential(settings.firebase_credential_path), options)
        logger.info(f"Firebase 앱 초기화: project={settings.firebase_project_id or '(ADC)'}")

    bucket = storage.bucket(app=app) if settings.firebase_storage_bucket else None
    return FirebaseHandles(db=firestore.client(app), bucket=bucket)
