"""Inkwell 블로그 서비스 — 엔트리포인트.

1. 설정 로드 (.env + config/settings.yaml)
2. Firebase 초기화 (storage_backend=firestore 인 경우)
3. 의존성 컨테이너 조립
4. 카테고리 시드 데이터
5. 웹 서버 시작
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

import uvicorn

from inkwell.application.use_cases.manage_categories import build_category
from inkwell.infrastructure.config.container import Container
from inkwell.infrastructure.config.settings import AppConfig, Settings, load_app_config
from inkwell.infrastructure.database.firebase_client import connect_firebase
from inkwell.presentation.web.app import create_app

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    Path("logs").mkdir(exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("logs/app.log", encoding="utf-8"),
        ],
    )


def build_container(settings: Settings, config: AppConfig) -> Container:
    if settings.storage_backend != "firestore":
        logger.info(f"저장소 백엔드: {settings.storage_backend}")
        return Container(settings=settings, app_config=config)

    firebase = connect_firebase(settings)
    return Container(
        settings=settings,
        app_config=config,
        firestore_db=firebase.db,
        storage_bucket=firebase.bucket,
    )


async def seed_categories(container: Container, config: AppConfig) -> None:
    """YAML에 정의된 카테고리를 저장소에 시드."""
    for cat_cfg in config.categories:
        await container.category_repo.upsert(build_category(cat_cfg.name, cat_cfg.description))
    logger.info(f"카테고리 {len(config.categories)}개 시드 완료")


async def run_server(settings: Settings, config: AppConfig, host: str, port: int) -> None:
    """메인 서버 실행."""
    if not settings.jwt_secret_key:
        logger.warning("JWT_SECRET_KEY가 설정되지 않았습니다. 인증이 필요한 요청은 모두 실패합니다.")

    container = build_container(settings, config)
    await seed_categories(container, config)

    app = create_app(container)
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="info"))

    logger.info(f"서버 시작: http://{host}:{port}")
    await server.serve()


def main() -> None:
    parser = argparse.ArgumentParser(description="Inkwell blog service")
    subparsers = parser.add_subparsers(dest="command", help="실행 명령")

    serve_parser = subparsers.add_parser("serve", help="웹 서버 시작")
    serve_parser.add_argument("--host", default=None, help="바인드 주소 (기본: 설정 파일)")
    serve_parser.add_argument("--port", type=int, default=None, help="포트 (기본: 설정 파일)")

    subparsers.add_parser("seed-categories", help="설정 파일의 카테고리만 시드하고 종료")

    parser.add_argument("--config", default="config/settings.yaml", help="YAML 설정 파일 경로")

    args = parser.parse_args()

    setup_logging()
    settings = Settings()
    config = load_app_config(args.config)

    if args.command == "serve":
        asyncio.run(run_server(
            settings,
            config,
            host=args.host or config.web.host,
            port=args.port or config.web.port,
        ))
    elif args.command == "seed-categories":
        asyncio.run(seed_categories(build_container(settings, config), config))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
