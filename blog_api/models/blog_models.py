# blog_models.py
# This file defines the database structure for posts and their comments.
# We use SQLAlchemy's Object-Relational Mapper (ORM), which lets us define
# database tables as Python classes. These classes are called "models".

# --- Imports ---
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from blog_api.core.database import Base
from blog_api.models.user import _utcnow

# --- Post Model ---
# Each instance of this class represents a single row in the `posts` table.
class Post(Base):
    __tablename__ = "posts"
    # AUTOINCREMENT on SQLite keeps ids monotonic: a deleted post's id is not reused.
    __table_args__ = {"sqlite_autoincrement": True}

    # --- Columns ---
    id = Column(Integer, primary_key=True, autoincrement=True)

    # `Text` is for long strings. Empty strings are allowed, NULL is not.
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)

    # The authenticated user who created the post. Informational only:
    # any authenticated user may update or delete any post.
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # --- Relationships ---
    # All comments of this post, oldest first (e.g., `my_post.comments`).
    # `cascade="all, delete-orphan"` means if a post is deleted, all of its comments are deleted too.
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )

# --- Comment Model ---
# Each instance represents one comment, addressable by its own globally unique id.
class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Links this comment to a post. SQLite does not enforce the foreign key,
    # and the API accepts any numeric post_id.
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)

    content = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # The other side of the relationship (e.g., `my_comment.post`).
    post = relationship("Post", back_populates="comments")
