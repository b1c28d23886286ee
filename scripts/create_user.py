import asyncio
import os
import sys

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError
from sqlalchemy import select

from vidtube.db.session import async_session_maker
from vidtube.models.user import User
from vidtube.schemas.user import UserCreate
from vidtube.services.auth_service import create_user


async def main(email, username, full_name, password):
    try:
        data = UserCreate(email=email, username=username, full_name=full_name, password=password)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    async with async_session_maker() as session:
        res = await session.execute(
            select(User).where((User.email == data.email) | (User.username == data.username))
        )
        if res.scalar_one_or_none():
            print(f"Error: User with email '{email}' or username '{data.username}' already exists.")
            return 1
        user = await create_user(session, data)
        await session.commit()
        print("Success: User created!")
        print(f"ID: {user.id}")
        print(f"Username: {user.username}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 5:
        print("Usage: python scripts/create_user.py <email> <username> <full_name> <password>")
        sys.exit(1)
    sys.exit(asyncio.run(main(*sys.argv[1:5])))
