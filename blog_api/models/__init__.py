"""
The models package contains all SQLAlchemy ORM models
for the blog API.

For example:
from blog_api.models import User, Post, Comment
"""

from .user import User
from .blog_models import Post, Comment
