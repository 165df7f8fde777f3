# CRUD OPS: posts

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from blog_api import schemas
from blog_api.core.database import Store, is_storable_id
from blog_api.models import Post

logger = logging.getLogger(__name__)


def list_posts(db: Session) -> List[Post]:
    # Eager-load comments so every post in the list carries its current comment set.
    return (
        db.query(Post)
        .options(selectinload(Post.comments))
        .order_by(Post.id.asc())
        .all()
    )


def get_post(db: Session, post_id: int) -> Optional[Post]:
    if not is_storable_id(post_id):
        return None
    # populate_existing: a post already in this session is re-read, comments included
    return (
        db.query(Post)
        .options(selectinload(Post.comments))
        .populate_existing()
        .filter(Post.id == post_id)
        .first()
    )


def create_post(db: Session, store: Store, user_id: int, post: schemas.PostCreate) -> Post:
    with store.locked("posts"):
        db_post = Post(title=post.title, content=post.content, user_id=user_id)
        db.add(db_post)
        db.commit()
        db.refresh(db_post)
    logger.info("Post %d created by user %d", db_post.id, user_id)
    return db_post


def update_post(db: Session, store: Store, post_id: int, changes: dict) -> Optional[Post]:
    """Apply only the given fields. Returns None when the post does not exist (or no longer does)."""
    if not is_storable_id(post_id):
        return None
    with store.locked("posts"):
        # Re-read under the lock: the row may have been deleted since the caller looked it up
        db_post = db.get(Post, post_id, populate_existing=True)
        if db_post is None:
            return None
        for field, value in changes.items():
            setattr(db_post, field, value)
        if changes:
            db.commit()
    logger.info("Post %d updated (%s)", post_id, ", ".join(sorted(changes)) or "no changes")
    return get_post(db, post_id)


def delete_post(db: Session, store: Store, post_id: int) -> bool:
    """Delete a post together with all its comments. Returns False when absent."""
    if not is_storable_id(post_id):
        return False
    with store.locked("posts", "comments"):
        db_post = db.get(Post, post_id, populate_existing=True)
        if db_post is None:
            return False
        removed = len(db_post.comments)
        db.delete(db_post) # cascades to comments
        db.commit()
    logger.info("Post %d deleted with %d comment(s)", post_id, removed)
    return True
