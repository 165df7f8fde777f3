# CRUD OPS: users

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session # Import Session to enable type hinting for the database session.

from blog_api import schemas
from blog_api.core.database import Store, is_storable_id
from blog_api.core.errors import ConflictError
from blog_api.models import User

logger = logging.getLogger(__name__)


# Function to retrieve a user by email. Matching is case-insensitive.
def get_user_by_email(db: Session, email: str):
    # .first() returns the first result or None if not found.
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def get_user(db: Session, user_id: int):
    if not is_storable_id(user_id):
        return None
    return db.get(User, user_id)


# Function to create a new user in the database.
# The password must already be hashed; the plain value never reaches this layer.
def create_user(db: Session, store: Store, user: schemas.UserCreate, hashed_password: str):
    # Check-then-insert under the users lock so two registrations of one email cannot both pass.
    with store.locked("users"):
        if get_user_by_email(db, user.email):
            logger.info("Registration rejected: email already exists")
            raise ConflictError("Email already exists")
        db_user = User(name=user.name, email=user.email, hashed_password=hashed_password)
        db.add(db_user) # Add the new user object to the database session.
        db.commit() # Commit the transaction to save the user to the database.
        db.refresh(db_user) # Refresh to get auto-generated fields (id, created_at).
    logger.info("User %d registered", db_user.id)
    return db_user
