"""Auth endpoints: register, login, refresh."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_db
from vidtube.core.security import decode_token
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.schemas.user import LoginRequest, Token, TokenRefresh, UserCreate, UserResponse
from vidtube.services.auth_service import (
    authenticate_user,
    create_user,
    get_user_by_email,
    get_user_by_id,
    get_user_by_username,
    issue_tokens,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[Token], status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    logger.info("[Auth] Register attempt: %s %s", data.username, data.email)
    if await get_user_by_email(db, data.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    if await get_user_by_username(db, data.username):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    user = await create_user(db, data)
    await db.commit()
    logger.info("[Auth] Register success: %s %s", user.id, user.username)
    return api_response(issue_tokens(user), "User registered successfully", status.HTTP_201_CREATED)


@router.post("/login", response_model=ApiResponse[Token])
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    if not data.email and not data.username:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email or username is required")
    logger.info("[Auth] Login attempt: %s", data.email or data.username)
    user = await authenticate_user(db, data.password, email=data.email, username=data.username)
    if not user:
        logger.info("[Auth] Login failed: invalid credentials")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    logger.info("[Auth] Login success: %s %s", user.id, user.username)
    return api_response(issue_tokens(user), "User logged in successfully")


@router.post("/refresh", response_model=ApiResponse[Token])
async def refresh_token(
    body: TokenRefresh,
    db: AsyncSession = Depends(get_db),
):
    payload = decode_token(body.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    try:
        user_id = UUID(payload.get("sub") or "")
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    user = await get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return api_response(issue_tokens(user), "Access token refreshed")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def me(current_user: User = Depends(get_current_user)):
    return api_response(UserResponse.model_validate(current_user), "Current user fetched successfully")
