"""Authentication business logic."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.security import create_access_token, create_refresh_token, get_password_hash, verify_password
from vidtube.models.user import User
from vidtube.schemas.user import Token, UserCreate, UserResponse


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username.lower()))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    user = User(
        username=data.username,
        email=data.email,
        full_name=data.full_name,
        avatar=data.avatar,
        cover_image=data.cover_image,
        password_hash=get_password_hash(data.password),
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def authenticate_user(
    db: AsyncSession,
    password: str,
    *,
    email: str | None = None,
    username: str | None = None,
) -> User | None:
    if email:
        user = await get_user_by_email(db, email)
    elif username:
        user = await get_user_by_username(db, username)
    else:
        return None
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def issue_tokens(user: User) -> Token:
    return Token(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
        user=UserResponse.model_validate(user),
    )
