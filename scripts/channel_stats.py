import asyncio
import os
import sys

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vidtube.db.session import async_session_maker
from vidtube.services.auth_service import get_user_by_username
from vidtube.services.dashboard_service import get_channel_stats


async def main(username):
    async with async_session_maker() as session:
        user = await get_user_by_username(session, username)
        if not user:
            print(f"Error: No user named '{username}'.")
            return 1
        stats = await get_channel_stats(session, user.id)
        print(f"Channel: {user.username} ({user.id})")
        print(f"- Subscribers: {stats.total_subscribers}")
        print(f"- Videos: {stats.total_videos}")
        print(f"- Views: {stats.total_views}")
        print(f"- Likes: {stats.total_likes}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/channel_stats.py <username>")
        sys.exit(1)
    sys.exit(asyncio.run(main(sys.argv[1])))
