"""Officer registration, login and the current-user dependency.

Sessions are stateless HS256 bearer tokens. With ``DEV_MODE=true`` a request
without a token is treated as the development officer so the UI can be used
locally without logging in.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..logging_config import user_id_var
from ..models import User
from ..services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


class Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=64, examples=["officer@example.gov.sg"])
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: str
    email: str


async def get_current_user(
    token: str | None = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to an officer, or 401."""
    user = None
    if token:
        user_id = auth_service.decode_access_token(token)
        if user_id is not None:
            user = db.get(User, user_id)
    elif get_settings().dev_mode:
        user = auth_service.get_or_create_dev_user(db)

    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id_var.set(str(user.id))
    return user


@router.post("/register", response_model=UserOut, status_code=201)
async def register(body: Credentials, db: Session = Depends(get_db)):
    if auth_service.get_user_by_email(db, body.email) is not None:
        raise HTTPException(status_code=409, detail="User already exists")
    user = auth_service.create_user(db, body.email, body.password)
    return UserOut(id=str(user.id), email=user.email)


@router.post("/login", response_model=TokenResponse)
async def login(body: Credentials, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, body.email, body.password)
    if user is None:
        logger.info("Failed login", extra={"officer_email": body.email})
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return TokenResponse(access_token=auth_service.create_access_token(user.id))


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    return UserOut(id=str(user.id), email=user.email)
