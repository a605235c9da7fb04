"""도메인 레이어 예외 정의.

모든 예외는 `code`와 `http_status`를 가지며, 프레젠테이션 레이어의
전역 핸들러가 이를 그대로 응답으로 변환한다.
"""


class DomainError(Exception):
    """도메인 레이어 최상위 예외."""

    code = "DOMAIN_ERROR"
    http_status = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """필수 필드 누락, 길이 초과 등 입력 오류."""

    code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(DomainError):
    """참조한 리소스가 존재하지 않을 때."""

    code = "NOT_FOUND"
    http_status = 404


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__(f"Post not found: {post_id}")


class CommentNotFoundError(NotFoundError):
    def __init__(self, comment_id: str):
        self.comment_id = comment_id
        super().__init__(f"Comment not found: {comment_id}")


class ReplyNotFoundError(NotFoundError):
    def __init__(self, reply_id: str):
        self.reply_id = reply_id
        super().__init__(f"Reply not found: {reply_id}")


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class ForbiddenError(DomainError):
    """행위자가 리소스를 변경할 권한이 없을 때."""

    code = "FORBIDDEN"
    http_status = 403


class ConflictError(DomainError):
    """저장된 상태와 충돌하는 변경."""

    code = "CONFLICT"
    http_status = 409


class SlugConflictError(ConflictError):
    """다른 게시물이 이미 같은 슬러그를 사용 중일 때."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"A post with slug '{slug}' already exists. Please choose a different title.")


class CategoryConflictError(ConflictError):
    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category already exists: {category_id}")


class StaleAggregateError(ConflictError):
    """낙관적 동시성 검사 실패. 호출자가 다시 읽어서 재시도해야 한다."""

    code = "STALE_AGGREGATE"

    def __init__(self, post_id: str, expected: int, actual: int):
        self.post_id = post_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Post {post_id} was modified concurrently "
            f"(expected version {expected}, stored version {actual}). Reload and retry."
        )


class PersistenceError(DomainError):
    """저장소 읽기/쓰기 실패. 재시도하지 않고 그대로 호출자에게 전달된다."""

    code = "PERSISTENCE_FAILURE"
    http_status = 503
