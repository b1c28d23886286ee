from vidtube.models import Like, Subscription


async def test_stats_default_to_zero(client, make_user, auth):
    user = await make_user("newbie")
    response = await client.get("/api/v1/dashboard/stats", headers=auth(user))
    assert response.status_code == 200
    assert response.json()["data"] == {
        "id": str(user.id),
        "total_subscribers": 0,
        "total_videos": 0,
        "total_views": 0,
        "total_likes": 0,
    }


async def test_stats_aggregate_channel_activity(client, make_user, make_video, make_comment, auth, db):
    owner = await make_user("creator")
    fan = await make_user("fan")
    other = await make_user("other")
    first = await make_video(owner, views=10)
    second = await make_video(owner, views=5, is_published=False)
    elsewhere = await make_video(other, views=1000)
    comment = await make_comment(fan, first)
    db.add_all([
        Subscription(subscriber_id=fan.id, channel_id=owner.id),
        Subscription(subscriber_id=other.id, channel_id=owner.id),
        Subscription(subscriber_id=owner.id, channel_id=other.id),
        Like(liked_by_id=fan.id, video_id=first.id),
        Like(liked_by_id=other.id, video_id=second.id),
        Like(liked_by_id=fan.id, video_id=elsewhere.id),
        Like(liked_by_id=other.id, comment_id=comment.id),
    ])
    await db.commit()

    stats = (await client.get("/api/v1/dashboard/stats", headers=auth(owner))).json()["data"]
    assert stats["total_subscribers"] == 2
    assert stats["total_videos"] == 2
    assert stats["total_views"] == 15
    assert stats["total_likes"] == 2


async def test_channel_videos_include_unpublished(client, make_user, make_video, auth):
    owner = await make_user("creator")
    other = await make_user("other")
    await make_video(owner, title="live")
    await make_video(owner, title="draft", is_published=False)
    await make_video(other, title="someone else")

    response = await client.get("/api/v1/dashboard/videos", headers=auth(owner))
    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total_videos"] == 2
    assert {v["title"] for v in page["videos"]} == {"live", "draft"}


async def test_dashboard_requires_authentication(client):
    assert (await client.get("/api/v1/dashboard/stats")).status_code == 401
    assert (await client.get("/api/v1/dashboard/videos")).status_code == 401
