# ----------------------------------------------------------------------
# Posts router: create / list / detail / partial update / delete.
# Every route requires a bearer token; the auth dependency is declared
# first so a missing token is reported before body or id problems.
# ----------------------------------------------------------------------
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api import schemas
from blog_api.core.database import Store
from blog_api.core.errors import NotFoundError
from blog_api.core.validation import validate_payload
from blog_api.crud import post as crud_post
from blog_api.dependencies import get_current_user_id, get_db, get_json_body, get_store

router = APIRouter()

POST_NOT_FOUND = "Post not found"


def _post_data(db_post) -> dict:
    return schemas.Post.model_validate(db_post).model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    user_id: int = Depends(get_current_user_id),
    payload: Any = Depends(get_json_body),
    db: Session = Depends(get_db),
    store: Store = Depends(get_store),
):
    post = validate_payload(schemas.PostCreate, payload)
    db_post = crud_post.create_post(db, store, user_id, post)
    return {"success": True, "message": "Post created successfully", "data": _post_data(db_post)}


@router.get("")
def list_posts(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": [_post_data(p) for p in crud_post.list_posts(db)]}


@router.get("/{id}")
def get_post(
    id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    db_post = crud_post.get_post(db, id)
    if db_post is None:
        raise NotFoundError(POST_NOT_FOUND)
    return {"success": True, "data": _post_data(db_post)}


@router.patch("/{id}")
def update_post(
    id: int,
    user_id: int = Depends(get_current_user_id),
    payload: Any = Depends(get_json_body),
    db: Session = Depends(get_db),
    store: Store = Depends(get_store),
):
    # Existence first: an unknown id is 404 whatever the body holds
    if crud_post.get_post(db, id) is None:
        raise NotFoundError(POST_NOT_FOUND)
    changes = validate_payload(schemas.PostUpdate, payload).changes()
    db_post = crud_post.update_post(db, store, id, changes)
    if db_post is None:
        # deleted by a concurrent request after the check above
        raise NotFoundError(POST_NOT_FOUND)
    return {"success": True, "message": "Post updated successfully", "data": _post_data(db_post)}


@router.delete("/{id}")
def delete_post(
    id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    store: Store = Depends(get_store),
):
    if not crud_post.delete_post(db, store, id):
        raise NotFoundError(POST_NOT_FOUND)
    return {"success": True, "message": "Post deleted successfully"}
