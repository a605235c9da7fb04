from __future__ import annotations

import logging

from inkwell.domain.entities import Actor
from inkwell.domain.exceptions import ForbiddenError

logger = logging.getLogger(__name__)


def can_mutate(actor: Actor, owner_id: str | None) -> bool:
    """관리자이거나 소유자 본인이면 변경 가능.

    소유자가 없는 리소스(작성자 없는 게시물)는 관리자만 변경할 수 있다.
    """
    if actor.is_admin:
        return True
    if owner_id is None:
        return False
    return actor.id == owner_id


def ensure_can_mutate(actor: Actor, owner_id: str | None, resource: str) -> None:
    if not can_mutate(actor, owner_id):
        logger.warning(f"권한 거부: actor={actor.id} resource={resource} owner={owner_id}")
        raise ForbiddenError(f"Not authorized to modify this {resource}")
