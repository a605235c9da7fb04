"""댓글/답글 REST API. 모든 변경은 인증이 필요하다."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from inkwell.domain.entities import Actor
from inkwell.presentation.web.auth import get_current_actor
from inkwell.presentation.web.serializers import comment_json, reply_json

router = APIRouter(prefix="/posts", tags=["comments"])


class ContentIn(BaseModel):
    content: Optional[str] = None


def _get_container(request: Request):
    return request.app.state.container


# ─── 댓글 ───


@router.post("/{post_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    request: Request,
    post_id: str,
    body: ContentIn,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    comment = await c.add_comment_use_case().execute(post_id, actor, body.content)
    return {"comment": comment_json(comment)}


@router.put("/{post_id}/comments/{comment_id}")
async def edit_comment(
    request: Request,
    post_id: str,
    comment_id: str,
    body: ContentIn,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    comment = await c.edit_comment_use_case().execute(post_id, comment_id, actor, body.content)
    return {"comment": comment_json(comment)}


@router.delete("/{post_id}/comments/{comment_id}")
async def delete_comment(
    request: Request,
    post_id: str,
    comment_id: str,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    await c.remove_comment_use_case().execute(post_id, comment_id, actor)
    return {"message": "Comment deleted"}


# ─── 답글 ───


@router.post("/{post_id}/comments/{comment_id}/replies", status_code=status.HTTP_201_CREATED)
async def add_reply(
    request: Request,
    post_id: str,
    comment_id: str,
    body: ContentIn,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    reply = await c.add_reply_use_case().execute(post_id, comment_id, actor, body.content)
    return {"reply": reply_json(reply)}


@router.put("/{post_id}/comments/{comment_id}/replies/{reply_id}")
async def edit_reply(
    request: Request,
    post_id: str,
    comment_id: str,
    reply_id: str,
    body: ContentIn,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    reply = await c.edit_reply_use_case().execute(
        post_id, comment_id, reply_id, actor, body.content
    )
    return {"reply": reply_json(reply)}


@router.delete("/{post_id}/comments/{comment_id}/replies/{reply_id}")
async def delete_reply(
    request: Request,
    post_id: str,
    comment_id: str,
    reply_id: str,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    await c.remove_reply_use_case().execute(post_id, comment_id, reply_id, actor)
    return {"message": "Reply deleted"}
