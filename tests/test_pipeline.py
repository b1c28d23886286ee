from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import aliased

from vidtube.db.pipeline import InvalidSortField, QueryPipeline, related_count
from vidtube.models import Like, Video
from vidtube.services.video_service import VIDEO_SORT_FIELDS, video_pipeline


async def _rows(db, pipeline):
    return (await db.execute(pipeline.statement())).all()


async def test_unpublished_videos_are_filtered(db, make_user, make_video):
    owner = await make_user("owner")
    await make_video(owner, title="public")
    await make_video(owner, title="hidden", is_published=False)

    titles = [row.Video.title for row in await _rows(db, video_pipeline())]
    assert titles == ["public"]

    titles = {row.Video.title for row in await _rows(db, video_pipeline(include_unpublished=True))}
    assert titles == {"public", "hidden"}


async def test_search_matches_title_or_description_case_insensitively(db, make_user, make_video):
    owner = await make_user("owner")
    await make_video(owner, title="Cooking Pasta", description="dinner")
    await make_video(owner, title="Gardening", description="Growing PASTA plants?")
    await make_video(owner, title="Running", description="outdoors")

    titles = {row.Video.title for row in await _rows(db, video_pipeline(query="pasta"))}
    assert titles == {"Cooking Pasta", "Gardening"}


async def test_search_treats_wildcards_literally(db, make_user, make_video):
    owner = await make_user("owner")
    await make_video(owner, title="100% cotton")
    await make_video(owner, title="1000 cottons")

    titles = [row.Video.title for row in await _rows(db, video_pipeline(query="0%"))]
    assert titles == ["100% cotton"]


async def test_blank_search_matches_everything(db, make_user, make_video):
    owner = await make_user("owner")
    await make_video(owner)
    await make_video(owner)
    assert len(await _rows(db, video_pipeline(query="   "))) == 2


async def test_enrichment_loads_owner_and_computed_likes(db, make_user, make_video):
    owner = await make_user("owner")
    fan = await make_user("fan")
    video = await make_video(owner)
    db.add_all([Like(liked_by_id=owner.id, video_id=video.id), Like(liked_by_id=fan.id, video_id=video.id)])
    await db.commit()

    (row,) = await _rows(db, video_pipeline())
    assert row.Video.owner.username == "owner"
    assert row.total_likes == 2


async def test_sort_by_column_and_direction(db, make_user, make_video):
    owner = await make_user("owner")
    await make_video(owner, title="b", views=5)
    await make_video(owner, title="a", views=50)
    await make_video(owner, title="c", views=1)

    desc_titles = [row.Video.title for row in await _rows(db, video_pipeline().sort("views", "desc"))]
    asc_titles = [row.Video.title for row in await _rows(db, video_pipeline().sort("views", "asc"))]
    assert desc_titles == ["a", "b", "c"]
    assert asc_titles == ["c", "b", "a"]


async def test_sort_defaults_to_descending(db, make_user, make_video):
    owner = await make_user("owner")
    start = datetime(2024, 1, 1)
    await make_video(owner, title="old", created_at=start)
    await make_video(owner, title="new", created_at=start + timedelta(days=1))

    titles = [row.Video.title for row in await _rows(db, video_pipeline().sort("created_at", None))]
    assert titles == ["new", "old"]


async def test_sort_by_computed_field(db, make_user, make_video):
    owner = await make_user("owner")
    fan = await make_user("fan")
    quiet = await make_video(owner, title="quiet")
    loved = await make_video(owner, title="loved")
    db.add_all([Like(liked_by_id=owner.id, video_id=loved.id), Like(liked_by_id=fan.id, video_id=loved.id)])
    db.add(Like(liked_by_id=fan.id, video_id=quiet.id))
    await db.commit()

    rows = await _rows(db, video_pipeline().sort("total_likes"))
    assert [(row.Video.title, row.total_likes) for row in rows] == [("loved", 2), ("quiet", 1)]


def test_unknown_sort_field_is_rejected():
    with pytest.raises(InvalidSortField) as exc:
        video_pipeline().sort("password_hash")
    for field in VIDEO_SORT_FIELDS:
        assert field in str(exc.value)


async def test_count_ignores_pagination_and_respects_filters(db, make_user, make_video):
    owner = await make_user("owner")
    other = await make_user("other")
    await make_video(owner)
    await make_video(owner)
    await make_video(other)

    assert await db.scalar(video_pipeline(owner_id=owner.id).count_statement()) == 2
    assert await db.scalar(video_pipeline().count_statement()) == 3


async def test_related_count_over_an_alias_of_the_outer_entity(db, make_user, make_video):
    owner = await make_user("owner")
    fan = await make_user("fan")
    video = await make_video(owner)
    db.add_all([Like(liked_by_id=owner.id, video_id=video.id), Like(liked_by_id=fan.id, video_id=video.id)])
    await db.commit()

    pipeline = (
        QueryPipeline(Like)
        .match(Like.liked_by_id == fan.id)
        .enrich(Like.video)
        .compute("total_likes", related_count(aliased(Like).video_id, Video.id))
    )
    (row,) = await _rows(db, pipeline)
    assert row.total_likes == 2
