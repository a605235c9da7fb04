"""카테고리 REST API."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from inkwell.domain.entities import Actor
from inkwell.presentation.web.auth import get_current_actor
from inkwell.presentation.web.serializers import category_json

router = APIRouter(prefix="/categories", tags=["categories"])


class CategoryIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


def _get_container(request: Request):
    return request.app.state.container


@router.get("")
async def list_categories(request: Request):
    c = _get_container(request)
    categories = await c.list_categories_use_case().execute()
    return {"categories": [category_json(cat) for cat in categories]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    request: Request,
    body: CategoryIn,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    category = await c.create_category_use_case().execute(actor, body.name, body.description)
    return {"category": category_json(category)}


@router.delete("/{category_id}")
async def delete_category(
    request: Request,
    category_id: str,
    actor: Actor = Depends(get_current_actor),
):
    c = _get_container(request)
    await c.delete_category_use_case().execute(actor, category_id)
    return {"message": "Category deleted"}
