"""User profile and channel endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.api.deps import get_current_user, get_current_user_optional, get_db
from vidtube.models.user import User
from vidtube.schemas.common import ApiResponse, api_response
from vidtube.schemas.user import ChannelProfile, UserResponse, UserUpdate
from vidtube.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(current_user: User = Depends(get_current_user)):
    return api_response(UserResponse.model_validate(current_user), "User fetched successfully")


@router.patch("/me", response_model=ApiResponse[UserResponse])
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.update_profile(db, current_user, data)
    await db.commit()
    return api_response(UserResponse.model_validate(user), "Account details updated successfully")


@router.get("/c/{username}", response_model=ApiResponse[ChannelProfile])
async def get_channel_profile(
    username: str,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    channel = await user_service.get_channel_profile(db, username, current_user.id if current_user else None)
    if channel is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Channel does not exist")
    return api_response(channel, "Channel fetched successfully")
