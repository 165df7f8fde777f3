# JWT + PASSWORD HASHING

from datetime import datetime, timedelta, timezone # For token expiration.
from typing import Optional

from jose import JWTError, jwt # Import the JWT library for creating and verifying tokens.
from passlib.context import CryptContext # Import CryptContext for password hashing.

from blog_api.core.errors import UnauthorizedError
from blog_api.utils.config import Settings


class SecurityManager:
    """Password hashing and stateless token handling bound to one Settings instance."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.secret_key
        self.algorithm = settings.jwt_algorithm
        self.expire_minutes = settings.access_token_expire_minutes
        # bcrypt hashing; 'deprecated="auto"' rehashes if the scheme list changes
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.bcrypt_rounds,
        )

    # --- Password Hashing ---
    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        return self.pwd_context.verify(plain, hashed)

    # --- JWT Access Token ---
    def create_access_token(self, user_id: int, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        to_encode = {"sub": str(user_id), "iat": now}
        if self.expire_minutes:
            to_encode["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> int:
        """Verify signature and expiry; return the user id in ``sub``."""
        if not token:
            raise UnauthorizedError()
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise UnauthorizedError() from None
        sub = payload.get("sub")
        try:
            return int(sub)
        except (TypeError, ValueError):
            raise UnauthorizedError() from None
