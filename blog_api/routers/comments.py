from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api import schemas
from blog_api.core.database import Store
from blog_api.core.errors import NotFoundError
from blog_api.core.validation import validate_payload
from blog_api.crud import comment as crud_comment
from blog_api.dependencies import get_current_user_id, get_db, get_json_body, get_store

router = APIRouter()

COMMENT_NOT_FOUND = "Comment not found"


def _comment_data(db_comment) -> dict:
    return schemas.Comment.model_validate(db_comment).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_comment(
    user_id: int = Depends(get_current_user_id),
    payload: Any = Depends(get_json_body),
    db: Session = Depends(get_db),
    store: Store = Depends(get_store),
):
    comment = validate_payload(schemas.CommentCreate, payload)
    db_comment = crud_comment.create_comment(db, store, user_id, comment)
    return {"success": True, "message": "Comment created successfully", "data": _comment_data(db_comment)}


@router.get("/{id}")
def get_comment(
    id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    db_comment = crud_comment.get_comment(db, id)
    if db_comment is None:
        raise NotFoundError(COMMENT_NOT_FOUND)
    return {"success": True, "data": _comment_data(db_comment)}


@router.delete("/{id}")
def delete_comment(
    id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    store: Store = Depends(get_store),
):
    if not crud_comment.delete_comment(db, store, id):
        raise NotFoundError(COMMENT_NOT_FOUND)
    return {"success": True, "message": "Comment deleted successfully"}
