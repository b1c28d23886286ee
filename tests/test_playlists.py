from uuid import uuid4

from sqlalchemy import func, select

from vidtube.models import PlaylistVideo


async def _create_playlist(client, headers, name="Favourites", description="Best of"):
    response = await client.post("/api/v1/playlists", json={"name": name, "description": description}, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


async def test_create_playlist(client, make_user, auth):
    owner = await make_user("curator")
    playlist = await _create_playlist(client, auth(owner), name=" Mix ")
    assert playlist["name"] == "Mix"
    assert playlist["owner_id"] == str(owner.id)


async def test_create_playlist_requires_name_and_description(client, make_user, auth):
    owner = await make_user("curator")
    response = await client.post("/api/v1/playlists", json={"name": "Mix", "description": " "}, headers=auth(owner))
    assert response.status_code == 400
    response = await client.post("/api/v1/playlists", json={"description": "d"}, headers=auth(owner))
    assert response.status_code == 400


async def test_add_video_and_totals(client, make_user, make_video, auth):
    owner = await make_user("curator")
    first = await make_video(owner, title="one", views=10, duration=30.5)
    second = await make_video(owner, title="two", views=5, duration=60)
    playlist = await _create_playlist(client, auth(owner))

    await client.patch(f"/api/v1/playlists/add/{first.id}/{playlist['id']}", headers=auth(owner))
    response = await client.patch(f"/api/v1/playlists/add/{second.id}/{playlist['id']}", headers=auth(owner))
    assert response.status_code == 200
    detail = response.json()["data"]
    assert [v["title"] for v in detail["videos"]] == ["one", "two"]
    assert detail["total_videos"] == 2
    assert detail["total_views"] == 15
    assert detail["duration"] == 90.5
    assert detail["owner"]["username"] == "curator"


async def test_adding_a_video_twice_conflicts(client, make_user, make_video, auth, session_maker):
    owner = await make_user("curator")
    video = await make_video(owner)
    playlist = await _create_playlist(client, auth(owner))

    url = f"/api/v1/playlists/add/{video.id}/{playlist['id']}"
    assert (await client.patch(url, headers=auth(owner))).status_code == 200
    response = await client.patch(url, headers=auth(owner))
    assert response.status_code == 409
    async with session_maker() as session:
        assert await session.scalar(select(func.count()).select_from(PlaylistVideo)) == 1


async def test_remove_video(client, make_user, make_video, auth):
    owner = await make_user("curator")
    video = await make_video(owner)
    playlist = await _create_playlist(client, auth(owner))
    await client.patch(f"/api/v1/playlists/add/{video.id}/{playlist['id']}", headers=auth(owner))

    response = await client.patch(f"/api/v1/playlists/remove/{video.id}/{playlist['id']}", headers=auth(owner))
    assert response.status_code == 200
    assert response.json()["data"]["videos"] == []
    assert response.json()["data"]["total_videos"] == 0

    response = await client.patch(f"/api/v1/playlists/remove/{video.id}/{playlist['id']}", headers=auth(owner))
    assert response.status_code == 409


async def test_membership_changes_require_ownership(client, make_user, make_video, auth):
    owner = await make_user("curator")
    intruder = await make_user("intruder")
    video = await make_video(owner)
    playlist = await _create_playlist(client, auth(owner))

    response = await client.patch(f"/api/v1/playlists/add/{video.id}/{playlist['id']}", headers=auth(intruder))
    assert response.status_code == 403
    response = await client.patch(f"/api/v1/playlists/{playlist['id']}", json={"name": "x", "description": "y"}, headers=auth(intruder))
    assert response.status_code == 403
    response = await client.delete(f"/api/v1/playlists/{playlist['id']}", headers=auth(intruder))
    assert response.status_code == 403


async def test_add_missing_video_or_playlist(client, make_user, make_video, auth):
    owner = await make_user("curator")
    video = await make_video(owner)
    playlist = await _create_playlist(client, auth(owner))

    response = await client.patch(f"/api/v1/playlists/add/{uuid4()}/{playlist['id']}", headers=auth(owner))
    assert response.status_code == 404
    response = await client.patch(f"/api/v1/playlists/add/{video.id}/{uuid4()}", headers=auth(owner))
    assert response.status_code == 404


async def test_unpublished_videos_are_left_out_of_totals(client, make_user, make_video, auth):
    owner = await make_user("curator")
    public = await make_video(owner, views=3, thumbnail="http://media.test/public.jpg")
    draft = await make_video(owner, views=100, is_published=False)
    playlist = await _create_playlist(client, auth(owner))
    await client.patch(f"/api/v1/playlists/add/{draft.id}/{playlist['id']}", headers=auth(owner))
    await client.patch(f"/api/v1/playlists/add/{public.id}/{playlist['id']}", headers=auth(owner))

    detail = (await client.get(f"/api/v1/playlists/{playlist['id']}")).json()["data"]
    assert detail["total_videos"] == 1
    assert detail["total_views"] == 3

    page = (await client.get(f"/api/v1/playlists/user/{owner.id}")).json()["data"]
    assert page["total_playlists"] == 1
    summary = page["playlists"][0]
    assert summary["thumbnail"] == "http://media.test/public.jpg"
    assert summary["total_videos"] == 1
    assert summary["total_views"] == 3


async def test_list_user_playlists(client, make_user, auth):
    owner = await make_user("curator")
    await _create_playlist(client, auth(owner), name="A")
    await _create_playlist(client, auth(owner), name="B")

    response = await client.get(f"/api/v1/playlists/user/{owner.id}", params={"limit": 1})
    page = response.json()["data"]
    assert page["total_playlists"] == 2
    assert page["total_pages"] == 2
    assert len(page["playlists"]) == 1
    assert page["playlists"][0]["thumbnail"] is None


async def test_list_playlists_of_missing_user(client):
    response = await client.get(f"/api/v1/playlists/user/{uuid4()}")
    assert response.status_code == 404


async def test_update_and_delete_playlist(client, make_user, make_video, auth, session_maker):
    owner = await make_user("curator")
    video = await make_video(owner)
    playlist = await _create_playlist(client, auth(owner))
    await client.patch(f"/api/v1/playlists/add/{video.id}/{playlist['id']}", headers=auth(owner))

    response = await client.patch(
        f"/api/v1/playlists/{playlist['id']}", json={"name": "Renamed", "description": "New"}, headers=auth(owner)
    )
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Renamed"

    response = await client.delete(f"/api/v1/playlists/{playlist['id']}", headers=auth(owner))
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/playlists/{playlist['id']}")).status_code == 404
    async with session_maker() as session:
        assert await session.scalar(select(func.count()).select_from(PlaylistVideo)) == 0
