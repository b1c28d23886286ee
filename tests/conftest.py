import os
import uuid

# Settings are read at import time; point the app at a throwaway SQLite database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vidtube.core.security import create_access_token, get_password_hash
from vidtube.db import base  # noqa: F401
from vidtube.db.session import Base, get_db
from vidtube.main import app
from vidtube.models import Comment, Tweet, User, Video
from vidtube.services import storage_service
from vidtube.services.storage_service import LocalStorage
from vidtube.workers import media


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy emit BEGIN
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def storage(tmp_path, monkeypatch):
    local = LocalStorage(base_dir=tmp_path, base_url="http://media.test")
    monkeypatch.setattr(storage_service, "_storage", local)
    return local


@pytest.fixture
def cleanup_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(media.delete_media, "delay", lambda urls: calls.append(list(urls)))
    return calls


@pytest.fixture
async def client(session_maker, storage, cleanup_calls):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    async def _make_user(username=None, password="password123", **fields):
        username = username or f"user_{uuid.uuid4().hex[:8]}"
        user = User(
            username=username,
            email=fields.pop("email", f"{username}@example.com"),
            full_name=fields.pop("full_name", username.title()),
            password_hash=get_password_hash(password),
            **fields,
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_video(db):
    async def _make_video(owner, title="A video", description="Something to watch", **fields):
        video = Video(
            owner_id=owner.id,
            title=title,
            description=description,
            video_file=fields.pop("video_file", f"http://media.test/uploads/users/{owner.id}/videos/{uuid.uuid4().hex}.mp4"),
            thumbnail=fields.pop("thumbnail", f"http://media.test/uploads/users/{owner.id}/thumbnails/{uuid.uuid4().hex}.jpg"),
            **fields,
        )
        db.add(video)
        await db.commit()
        return video

    return _make_video


@pytest.fixture
def make_comment(db):
    async def _make_comment(owner, video, content="Nice video"):
        comment = Comment(owner_id=owner.id, video_id=video.id, content=content)
        db.add(comment)
        await db.commit()
        return comment

    return _make_comment


@pytest.fixture
def make_tweet(db):
    async def _make_tweet(owner, content="Hello channel"):
        tweet = Tweet(owner_id=owner.id, content=content)
        db.add(tweet)
        await db.commit()
        return tweet

    return _make_tweet


@pytest.fixture
def auth():
    def _auth(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth
