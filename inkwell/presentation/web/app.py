"""FastAPI 웹 애플리케이션 팩토리."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from inkwell.infrastructure.config.container import Container
from inkwell.infrastructure.storage.local_storage import LocalAssetStore
from inkwell.presentation.web.error_handlers import register_error_handlers
from inkwell.presentation.web.routes import categories, comments, posts


def create_app(container: Container) -> FastAPI:
    app = FastAPI(title=container.config.name, version="0.1.0")

    # 컨테이너를 앱 state에 저장
    app.state.container = container

    register_error_handlers(app)

    # 로컬 저장소를 쓰는 경우 업로드 이미지를 정적 파일로 제공
    if isinstance(container.asset_store, LocalAssetStore):
        app.mount(
            "/uploads",
            StaticFiles(directory=str(container.asset_store.directory), check_dir=False),
            name="uploads",
        )

    # 라우터 등록
    app.include_router(posts.router)
    app.include_router(comments.router)
    app.include_router(categories.router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app
