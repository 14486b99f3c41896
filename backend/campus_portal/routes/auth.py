import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_portal.core.auth import get_current_user
from campus_portal.core.permissions import permissions_for_user
from campus_portal.core.security import create_access_token, get_password_hash, verify_password
from campus_portal.database.deps import get_db
from campus_portal.models.user import User
from campus_portal.schemas.token import Token
from campus_portal.schemas.user import UserCreate, UserLogin, UserOut
from campus_portal.services.date_windows import utc_now

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Auth"])
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(value: str) -> bool:
    if not value:
        return False
    return bool(EMAIL_PATTERN.match(value))


def build_user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        full_name=user.full_name,
        phone_number=user.phone_number,
        profile_picture=user.profile_picture,
        permissions=permissions_for_user(user),
        created_at=user.created_at,
    )


def find_login_user(db: Session, username: Optional[str], email: Optional[str]) -> Optional[User]:
    """Resolve the account for a login attempt.

    An email is tried first; when no account carries it, the part before the
    ``@`` is tried as a username. Without an email the username is used.
    """
    email = (email or "").strip()
    username = (username or "").strip()

    if email:
        user = db.query(User).filter(User.email == email).first()
        if user:
            return user
        fallback_username = email.split("@", 1)[0]
        if fallback_username:
            return db.query(User).filter(User.username == fallback_username).first()
        return None

    if username:
        return db.query(User).filter(User.username == username).first()
    return None


@router.post("/login", response_model=Token)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    if not (credentials.email or "").strip() and not (credentials.username or "").strip():
        raise HTTPException(status_code=400, detail="Username or email is required")

    user = find_login_user(db, credentials.username, credentials.email)
    if not user or not verify_password(credentials.password, user.password):
        logger.warning("Failed login for %s", credentials.email or credentials.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token({
        "sub": str(user.id),
        "role": user.role,
        "username": user.username,
        "permissions": permissions_for_user(user),
    })
    return {"access_token": token, "token_type": "bearer", "user": build_user_out(user)}


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    username = payload.username.strip()
    email = payload.email.strip()
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Invalid email")

    existing = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing:
        if existing.username == username:
            raise HTTPException(status_code=409, detail="Username already taken")
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(
        username=username,
        email=email,
        password=get_password_hash(payload.password),
        role="student",
        full_name=payload.full_name.strip(),
        phone_number=payload.phone_number,
        created_at=utc_now(),
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(status_code=409, detail="Username or email already registered") from exc

    logger.info("Registered student %s", user.username)
    return build_user_out(user)


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return build_user_out(current_user)
