import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from blog_api import schemas
from blog_api.core.database import Store
from blog_api.core.errors import UnauthorizedError
from blog_api.core.security import SecurityManager
from blog_api.core.validation import validate_payload
from blog_api.crud import user as crud_user
from blog_api.dependencies import get_current_user, get_db, get_json_body, get_security, get_store
from blog_api.models import User

router = APIRouter()
logger = logging.getLogger(__name__)


# ============================
# 👤 Register User
# ============================
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(
    payload: Any = Depends(get_json_body),
    db: Session = Depends(get_db),
    store: Store = Depends(get_store),
    security: SecurityManager = Depends(get_security),
):
    user = validate_payload(schemas.UserCreate, payload)
    db_user = crud_user.create_user(db, store, user, security.hash_password(user.password))
    return {
        "success": True,
        "message": "User registered successfully",
        "data": schemas.User.model_validate(db_user).model_dump(mode="json"),
    }


# ============================
# 🔐 Login (Bearer token)
# ============================
@router.post("/login")
def login(
    payload: Any = Depends(get_json_body),
    db: Session = Depends(get_db),
    security: SecurityManager = Depends(get_security),
):
    try:
        credentials = schemas.LoginRequest.model_validate(payload if isinstance(payload, dict) else {})
    except PydanticValidationError:
        logger.info("Login rejected: missing or malformed credentials")
        raise UnauthorizedError() from None

    user = crud_user.get_user_by_email(db, credentials.email)
    if not user or not security.verify_password(credentials.password, user.hashed_password):
        logger.info("Login rejected: unknown email or wrong password")
        raise UnauthorizedError()

    token = schemas.Token(access_token=security.create_access_token(user.id))
    logger.info("User %d logged in", user.id)
    return {"success": True, "message": "Login success", "data": token.model_dump()}


# ============================
# 👀 Get Current User (/me)
# ============================
@router.get("/me")
def read_current_user(current_user: User = Depends(get_current_user)):
    return {
        "success": True,
        "data": schemas.User.model_validate(current_user).model_dump(mode="json"),
    }
