"""Authentication service for JWT and password handling."""

import logging
from functools import lru_cache
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import AuthError, DuplicateError, StoreError
from src.models.user import User
from src.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


@lru_cache
def dummy_password_hash() -> str:
    """Hash compared against when the email is unknown."""
    return get_password_hash("not-a-real-password")


def create_access_token(user: User) -> str:
    """Create a JWT access token carrying the user's id and admin flag."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "id": user.id,
        "isAdmin": bool(user.is_admin),
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate a JWT token.

    Raises AuthError when the signature, expiry or claim set is invalid.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return TokenClaims.model_validate(payload)
    except (JWTError, PydanticValidationError) as e:
        raise AuthError("Invalid token") from e


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Unknown emails and wrong passwords raise the same error.
    """
    user = get_user_by_email(db, email)
    # Unknown emails still pay for a bcrypt check so timing does not reveal them
    password_hash = user.password_hash if user else dummy_password_hash()
    if not verify_password(password, password_hash) or not user:
        logger.warning(f"Failed login attempt for {email}")
        raise AuthError("Invalid credentials")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def list_users(db: Session) -> list[User]:
    """Get all users, oldest first."""
    return db.query(User).order_by(User.created_at).all()


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    mobile: str,
    gender: str,
) -> User:
    """Create a new non-admin user."""
    if get_user_by_email(db, email):
        raise DuplicateError("Email already registered")

    user = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        mobile=mobile,
        gender=gender,
        is_admin=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race against a concurrent registration with the same email
        db.rollback()
        raise DuplicateError("Email already registered") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to register user {email}: {e}")
        raise StoreError("Registration failed") from e

    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
