from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer, String # Import column types for defining database columns.
from blog_api.core.database import Base # All SQLAlchemy models inherit from the shared Base.


def _utcnow():
    return datetime.now(timezone.utc)


# This class defines the User model for the database.
# It inherits from Base, making it a SQLAlchemy ORM model.
class User(Base):
    # __tablename__ tells SQLAlchemy the name of the table to use in the database for this model.
    __tablename__ = "users"
    # AUTOINCREMENT on SQLite: ids of deleted rows are never handed out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Display name; required but not unique.
    name = Column(String(255), nullable=False)
    # 'unique=True' ensures no two users can have the same email (the API also checks case-insensitively).
    email = Column(String(320), unique=True, index=True, nullable=False)
    # Only the bcrypt hash is stored, never the plain password.
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
