"""공용 테스트 픽스처: 인메모리 저장소 + 임시 디렉터리 이미지 저장소 + FastAPI 테스트 클라이언트.

- 매 테스트마다 새 Container(storage_backend=memory)를 만든다.
- 토큰은 외부 인증 서비스 대신 PyJWT로 직접 서명한다.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import ASGITransport, AsyncClient

from inkwell.application.use_cases.manage_posts import PostDraft
from inkwell.domain.entities import Actor, Category, User
from inkwell.domain.services.asset_store import ImageUpload
from inkwell.infrastructure.config.container import Container
from inkwell.infrastructure.config.settings import AppConfig, Settings
from inkwell.presentation.web.app import create_app

SECRET = "test-secret-key-that-is-long-enough-for-hs256"

ALICE = Actor(id="user-alice", username="alice")
BOB = Actor(id="user-bob", username="bob")
ADMIN = Actor(id="user-admin", is_admin=True, username="admin")

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def make_token(actor: Actor, expires_in: timedelta = timedelta(hours=1)) -> str:
    claims = {
        "sub": actor.id,
        "isAdmin": actor.is_admin,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if actor.username:
        claims["username"] = actor.username
    return jwt.encode(claims, SECRET, algorithm="HS256")


def auth(actor: Actor) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(actor)}"}


def image(name: str = "cover.png") -> ImageUpload:
    return ImageUpload(filename=name, content_type="image/png", data=PNG_BYTES)


def draft(title: str = "Hello, World!", category_id: str = "general", **kwargs) -> PostDraft:
    return PostDraft(title=title, content=kwargs.pop("content", "Body text"), category_id=category_id, **kwargs)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        storage_backend="memory",
        jwt_secret_key=SECRET,
        upload_dir=str(tmp_path / "uploads"),
        firebase_storage_bucket="",
    )


@pytest.fixture
def app_config():
    return AppConfig({"listing": {"default_page_size": 10, "max_page_size": 50}})


@pytest.fixture
async def container(settings, app_config):
    c = Container(settings=settings, app_config=app_config)
    await c.category_repo.upsert(Category(id="general", name="General", description="Anything"))
    await c.category_repo.upsert(Category(id="travel", name="Travel"))
    c.user_repo.put(User(id=ALICE.id, username="alice", name="Alice Kim", email="alice@example.com"))
    c.user_repo.put(User(id=BOB.id, username="bob", name="Bob Lee", email="bob@example.com"))
    return c


@pytest.fixture
async def client(container):
    app = create_app(container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def alice_post(container):
    """alice가 작성한 게시물 하나."""
    return await container.create_post_use_case().execute(ALICE, draft(), image())
