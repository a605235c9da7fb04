"""게시물 REST API — 목록/조회/생성/수정/삭제/조회수."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status

from inkwell.application.use_cases.list_posts import PostFilter
from inkwell.application.use_cases.manage_posts import PostDraft, PostPatch
from inkwell.domain.entities import Actor
from inkwell.domain.exceptions import ValidationError
from inkwell.domain.services.asset_store import ImageUpload
from inkwell.presentation.web.auth import get_current_actor
from inkwell.presentation.web.serializers import post_json, post_view_json

router = APIRouter(prefix="/posts", tags=["posts"])


def _get_container(request: Request):
    return request.app.state.container


def _split_tags(tags: str | None) -> list[str] | None:
    if tags is None:
        return None
    return tags.split(",")


def _too_large(max_kb: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"Image file size exceeds the limit of {max_kb} KB.",
    )


async def _read_image(request: Request, image: UploadFile | None) -> ImageUpload | None:
    """업로드 파일을 읽고 크기/타입을 검사한다. 파일이 없으면 None."""
    if image is None or not image.filename:
        return None
    uploads = _get_container(request).config.uploads
    content_type = image.content_type or "application/octet-stream"
    if content_type not in uploads.allowed_content_types:
        raise ValidationError(f"Unsupported image type: {content_type}")
    limit = uploads.max_image_bytes
    if image.size is not None and image.size > limit:
        raise _too_large(uploads.max_image_kb)
    # 한도 + 1바이트까지만 읽는다
    data = await image.read(limit + 1)
    if len(data) > limit:
        raise _too_large(uploads.max_image_kb)
    return ImageUpload(filename=image.filename, content_type=content_type, data=data)


@router.get("")
async def list_posts(
    request: Request,
    page: int = 1,
    limit: int | None = None,
    search: str | None = None,
    category: str | None = None,
):
    c = _get_container(request)
    result = await c.list_posts_use_case().execute(
        PostFilter(title_contains=search, category_id=category),
        page=page,
        page_size=limit,
    )
    return {
        "posts": [post_view_json(v) for v in result.items],
        "total": result.total,
        "page": result.page,
        "pages": result.pages,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    request: Request,
    actor: Actor = Depends(get_current_actor),
    title: str | None = Form(None),
    content: str | None = Form(None),
    category: str | None = Form(None),
    excerpt: str | None = Form(None),
    tags: str | None = Form(None),
    isPublished: bool = Form(False),
    image: UploadFile | None = File(None),
):
    c = _get_container(request)
    draft = PostDraft(
        title=title or "",
        content=content or "",
        category_id=category or "",
        excerpt=excerpt,
        tags=_split_tags(tags) or [],
        is_published=isPublished,
    )
    post = await c.create_post_use_case().execute(actor, draft, await _read_image(request, image))
    return {"post": post_json(post)}


@router.get("/{post_id}")
async def get_post(request: Request, post_id: str):
    c = _get_container(request)
    view = await c.get_post_use_case().execute(post_id)
    return post_view_json(view)


@router.put("/{post_id}")
async def update_post(
    request: Request,
    post_id: str,
    actor: Actor = Depends(get_current_actor),
    title: str | None = Form(None),
    content: str | None = Form(None),
    category: str | None = Form(None),
    excerpt: str | None = Form(None),
    tags: str | None = Form(None),
    isPublished: bool | None = Form(None),
    image: UploadFile | None = File(None),
):
    c = _get_container(request)
    patch = PostPatch(
        title=title,
        content=content,
        category_id=category,
        excerpt=excerpt,
        tags=_split_tags(tags),
        is_published=isPublished,
    )
    post = await c.update_post_use_case().execute(
        post_id, actor, patch, await _read_image(request, image)
    )
    return {"post": post_json(post)}


@router.delete("/{post_id}")
async def delete_post(request: Request, post_id: str, actor: Actor = Depends(get_current_actor)):
    c = _get_container(request)
    await c.delete_post_use_case().execute(post_id, actor)
    return {"message": "Post deleted"}


@router.post("/{post_id}/views")
async def record_view(request: Request, post_id: str):
    c = _get_container(request)
    view_count = await c.record_view_use_case().execute(post_id)
    return {"viewCount": view_count}
