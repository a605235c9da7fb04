"""의존성 주입 컨테이너.

클린 아키텍처에서 모든 의존성 조립은 최외곽(Composition Root)에서 이루어진다.
이 컨테이너가 설정에 따라 구체 구현을 생성하고 유즈케이스에 주입한다.
"""

from __future__ import annotations

from inkwell.application.use_cases.list_posts import ListPostsUseCase
from inkwell.application.use_cases.manage_categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    ListCategoriesUseCase,
)
from inkwell.application.use_cases.manage_discussion import (
    AddCommentUseCase,
    AddReplyUseCase,
    EditCommentUseCase,
    EditReplyUseCase,
    RemoveCommentUseCase,
    RemoveReplyUseCase,
)
from inkwell.application.use_cases.manage_posts import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    RecordViewUseCase,
    UpdatePostUseCase,
)
from inkwell.infrastructure.config.settings import AppConfig, Settings
from inkwell.infrastructure.database.memory import (
    InMemoryCategoryRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
)
from inkwell.infrastructure.database.repositories.category_repo import FirestoreCategoryRepository
from inkwell.infrastructure.database.repositories.post_repo import FirestorePostRepository
from inkwell.infrastructure.database.repositories.user_repo import FirestoreUserRepository
from inkwell.infrastructure.storage.firebase_storage import FirebaseAssetStore
from inkwell.infrastructure.storage.local_storage import LocalAssetStore


class Container:
    """애플리케이션 의존성 컨테이너."""

    def __init__(
        self,
        settings: Settings,
        app_config: AppConfig,
        firestore_db=None,
        storage_bucket=None,
    ):
        self.settings = settings
        self.config = app_config

        # ─── Repositories ───
        if settings.storage_backend == "memory":
            self.post_repo = InMemoryPostRepository()
            self.category_repo = InMemoryCategoryRepository()
            self.user_repo = InMemoryUserRepository()
        elif settings.storage_backend == "firestore":
            if firestore_db is None:
                raise ValueError("storage_backend=firestore 에는 Firestore 클라이언트가 필요합니다")
            self.post_repo = FirestorePostRepository(firestore_db)
            self.category_repo = FirestoreCategoryRepository(firestore_db)
            self.user_repo = FirestoreUserRepository(firestore_db)
        else:
            raise ValueError(f"알 수 없는 storage_backend: '{settings.storage_backend}'")

        # ─── Asset Store ───
        if storage_bucket is not None:
            self.asset_store = FirebaseAssetStore(storage_bucket)
        else:
            self.asset_store = LocalAssetStore(settings.upload_dir)

    # ─── Use Case 팩토리 ───

    def list_posts_use_case(self) -> ListPostsUseCase:
        return ListPostsUseCase(
            post_repo=self.post_repo,
            category_repo=self.category_repo,
            user_repo=self.user_repo,
            default_page_size=self.config.listing.default_page_size,
            max_page_size=self.config.listing.max_page_size,
        )

    def get_post_use_case(self) -> GetPostUseCase:
        return GetPostUseCase(self.post_repo, self.category_repo, self.user_repo)

    def create_post_use_case(self) -> CreatePostUseCase:
        return CreatePostUseCase(self.post_repo, self.category_repo, self.asset_store)

    def update_post_use_case(self) -> UpdatePostUseCase:
        return UpdatePostUseCase(self.post_repo, self.category_repo, self.asset_store)

    def delete_post_use_case(self) -> DeletePostUseCase:
        return DeletePostUseCase(self.post_repo)

    def record_view_use_case(self) -> RecordViewUseCase:
        return RecordViewUseCase(self.post_repo)

    def add_comment_use_case(self) -> AddCommentUseCase:
        return AddCommentUseCase(self.post_repo, self.user_repo)

    def edit_comment_use_case(self) -> EditCommentUseCase:
        return EditCommentUseCase(self.post_repo)

    def remove_comment_use_case(self) -> RemoveCommentUseCase:
        return RemoveCommentUseCase(self.post_repo)

    def add_reply_use_case(self) -> AddReplyUseCase:
        return AddReplyUseCase(self.post_repo, self.user_repo)

    def edit_reply_use_case(self) -> EditReplyUseCase:
        return EditReplyUseCase(self.post_repo)

    def remove_reply_use_case(self) -> RemoveReplyUseCase:
        return RemoveReplyUseCase(self.post_repo)

    def list_categories_use_case(self) -> ListCategoriesUseCase:
        return ListCategoriesUseCase(self.category_repo)

    def create_category_use_case(self) -> CreateCategoryUseCase:
        return CreateCategoryUseCase(self.category_repo)

    def delete_category_use_case(self) -> DeleteCategoryUseCase:
        return DeleteCategoryUseCase(self.category_repo)
