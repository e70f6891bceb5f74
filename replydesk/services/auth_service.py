"""Password hashing, session tokens and officer lookup."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import get_settings
from ..exceptions import ValidationError
from ..models import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError("Password must be at most 72 bytes")
    return pwd_context.hash(password)


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return pwd_context.verify(password, hashed)


def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.jwt_expire_hours)
    )
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[UUID]:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        subject = payload.get("sub")
        return UUID(subject) if subject else None
    except (JWTError, ValueError) as exc:
        logger.info(f"Rejected access token: {exc}")
        return None


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def create_user(db: Session, email: str, password: Optional[str]) -> User:
    user = User(email=email, password=hash_password(password) if password else None)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created officer account", extra={"officer_email": email})
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password):
        return None
    return user


def get_or_create_dev_user(db: Session) -> User:
    email = get_settings().dev_user_email
    user = get_user_by_email(db, email)
    if user is None:
        user = create_user(db, email, None)
    return user
