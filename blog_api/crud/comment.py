# CRUD OPS: comments

import logging
from typing import Optional

from sqlalchemy.orm import Session

from blog_api import schemas
from blog_api.core.database import Store, is_storable_id
from blog_api.models import Comment

logger = logging.getLogger(__name__)


def get_comment(db: Session, comment_id: int) -> Optional[Comment]:
    if not is_storable_id(comment_id):
        return None
    return db.get(Comment, comment_id)


# post_id is stored as given; the post is not required to exist.
def create_comment(db: Session, store: Store, user_id: int, comment: schemas.CommentCreate) -> Comment:
    with store.locked("comments"):
        db_comment = Comment(post_id=comment.post_id, content=comment.content, user_id=user_id)
        db.add(db_comment)
        db.commit()
        db.refresh(db_comment)
    logger.info("Comment %d created on post %d", db_comment.id, db_comment.post_id)
    return db_comment


def delete_comment(db: Session, store: Store, comment_id: int) -> bool:
    if not is_storable_id(comment_id):
        return False
    with store.locked("comments"):
        db_comment = db.get(Comment, comment_id, populate_existing=True)
        if db_comment is None:
            return False
        db.delete(db_comment)
        db.commit()
    logger.info("Comment %d deleted", comment_id)
    return True
