"""Bearer 토큰 → Actor 변환.

토큰은 외부 인증 서비스가 발급하며, 여기서는 서명만 검증하고 클레임을 그대로 신뢰한다.
클레임: sub(또는 userId), isAdmin(불리언 true일 때만 관리자), username(선택).
"""

from __future__ import annotations

import logging

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inkwell.domain.entities import Actor

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def actor_from_claims(payload: dict) -> Actor:
    subject = payload.get("sub") or payload.get("userId")
    if not subject:
        raise _unauthorized("Token has no subject")
    return Actor(
        id=str(subject),
        is_admin=payload.get("isAdmin") is True,
        username=payload.get("username"),
    )


async def get_current_actor(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Actor:
    if credentials is None:
        raise _unauthorized("Authorization header is missing or invalid")

    settings = request.app.state.container.settings
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"유효하지 않은 토큰: {e}")
        raise _unauthorized("Invalid token")

    return actor_from_claims(payload)
