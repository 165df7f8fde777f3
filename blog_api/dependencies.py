# This file contains shared dependencies used across different routers.

import json
from typing import Any, Iterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from blog_api.core.database import Store
from blog_api.core.errors import UnauthorizedError, ValidationError
from blog_api.core.security import SecurityManager
from blog_api.crud import user as crud_user
from blog_api.models import User


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_security(request: Request) -> SecurityManager:
    return request.app.state.security


# Dependency function to get a database session for a request.
# This pattern ensures the database session is always closed after the request is finished.
def get_db(store: Store = Depends(get_store)) -> Iterator[Session]:
    db = store.session()
    try:
        yield db
    finally:
        db.close()


# Decoded JSON body (None when empty). Declared after the auth dependency on
# protected routes, so a missing token wins over a malformed body.
async def get_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        raise ValidationError(["body must be valid JSON"]) from None


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError()
    return token.strip()


# Stateless: the signed token alone resolves the caller, no database lookup.
def get_current_user_id(
    authorization: Optional[str] = Header(None),
    security: SecurityManager = Depends(get_security),
) -> int:
    return security.decode_access_token(_bearer_token(authorization))


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = crud_user.get_user(db, user_id)
    if not user:
        raise UnauthorizedError()
    return user
