import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional
from bson import ObjectId
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError
from ..config import settings
from ..models.user import User
from .database import db, USERS

# Configure logging
logger = logging.getLogger(__name__)

# Name of the cookie the HTML pages keep the token in
TOKEN_COOKIE = "access_token"

# Password context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Header scheme; missing credentials are reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False)

class TokenPayload(BaseModel):
    sub: str  # user ID
    exp: int
    iat: int
    jti: str  # unique token identifier

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification failed: {str(e)}")
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def generate_secure_token(length: int = 32) -> str:
    """
    Generate a cryptographically secure random token
    """
    alphabet = string.ascii_letters + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))

def create_access_token(
    user_id: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT carrying the user id, valid for seven days by default
    """
    now = datetime.utcnow()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "exp": now + expires_delta,
        "iat": now,
        "jti": generate_secure_token()
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def decode_token(token: str) -> TokenPayload:
    """
    Decode and validate a JWT token; expiry is checked by jose
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"Token validation failed: {str(e)}")
        raise _unauthorized("Invalid token")

    if not ObjectId.is_valid(token_data.sub):
        raise _unauthorized("Invalid token")
    return token_data

async def get_user_from_token(token: Optional[str]) -> User:
    if not token:
        raise _unauthorized("Authentication required")

    token_data = decode_token(token)
    user = await db[USERS].find_one({"_id": ObjectId(token_data.sub)})
    if user is None:
        raise _unauthorized("User not found")
    return User(**user)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> User:
    """
    Dependency to get current authenticated user from the Authorization header
    """
    if credentials is None:
        raise _unauthorized("Authentication required")
    if credentials.scheme.lower() != "bearer":
        raise _unauthorized("Invalid authentication scheme")
    return await get_user_from_token(credentials.credentials)

async def get_optional_page_user(request: Request) -> Optional[User]:
    """
    Dependency for HTML pages: the user behind the token cookie, or None
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        return None
    try:
        return await get_user_from_token(token)
    except HTTPException:
        return None
