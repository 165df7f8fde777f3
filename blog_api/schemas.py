# blog_api/schemas.py
# Request models carry their own field checks (see core/validation.py);
# response models mirror the ORM classes in models/.
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from blog_api.core.validation import (
    require_email,
    require_not_empty,
    require_number,
    require_string,
    require_strong_password,
)

# -------------------------
# Auth / User
# -------------------------
class UserCreate(BaseModel):
    """Register body. Absent or empty fields only report emptiness."""
    name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return require_string(require_not_empty(v, "name"), "name")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v):
        return require_email(require_string(require_not_empty(v, "email"), "email"), "email")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v):
        return require_strong_password(require_string(require_not_empty(v, "password"), "password"), "password")


class LoginRequest(BaseModel):
    email: str
    password: str


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"

# -------------------------
# Posts
# -------------------------
class PostCreate(BaseModel):
    title: Optional[str] = Field(None, validate_default=True)
    content: Optional[str] = Field(None, validate_default=True)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _strings(cls, v, info):
        return require_string(v, info.field_name)


class PostUpdate(BaseModel):
    """Partial patch: only fields present in the body are applied."""
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def _strings(cls, v, info):
        return require_string(v, info.field_name)

    def changes(self) -> dict:
        return {k: getattr(self, k) for k in self.model_fields_set}

# -------------------------
# Comments
# -------------------------
class CommentCreate(BaseModel):
    post_id: Optional[int] = Field(None, validate_default=True)
    content: Optional[str] = Field(None, validate_default=True)

    @field_validator("post_id", mode="before")
    @classmethod
    def _post_id(cls, v):
        return require_number(v, "post_id")

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, v):
        return require_string(v, "content")


class Comment(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    post_id: int
    content: str
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None


class Post(BaseModel):
    """Mirror of models.blog_models.Post including nested comments."""
    model_config = ConfigDict(from_attributes=True)
    id: int
    title: str
    content: str
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    comments: List[Comment] = Field(default_factory=list)

# -------------------------
# Test support
# -------------------------
RESET_SCOPES = ("all", "users", "posts")


class ResetRequest(BaseModel):
    scope: Literal["all", "users", "posts"] = "all"

    @field_validator("scope", mode="before")
    @classmethod
    def _scope(cls, v):
        if v not in RESET_SCOPES:
            raise PydanticCustomError(
                "scope", "scope must be one of the following values: {values}", {"values": ", ".join(RESET_SCOPES)}
            )
        return v
