from fastapi import APIRouter, Depends, HTTPException, status

from .. import services
from ..models.user import AuthResponse, MeResponse, User, UserCreate, UserLogin
from ..utils.errors import server_error
from ..utils.security import get_current_user

router = APIRouter(prefix="/api/auth", tags=["authentication"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate):
    """
    Register a new user account and return a token for it
    """
    try:
        return await services.register_user(user_data)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)

@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin):
    """
    Authenticate user and return access token
    """
    try:
        return await services.authenticate_user(credentials)
    except HTTPException:
        raise
    except Exception as e:
        raise server_error(e)

@router.get("/me", response_model=MeResponse)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}
