from datetime import datetime, timedelta

import pytest

from vidtube.db.pagination import PageLabels, paginate
from vidtube.services.video_service import video_pipeline

LABELS = PageLabels(total="total_videos", items="videos")


async def _seed(make_user, make_video, count):
    owner = await make_user("pager")
    start = datetime(2024, 1, 1)
    videos = [
        await make_video(owner, title=f"video {i}", created_at=start + timedelta(minutes=i))
        for i in range(count)
    ]
    return owner, videos


async def test_pages_are_disjoint_and_cover_everything(db, make_user, make_video):
    _, videos = await _seed(make_user, make_video, 7)
    seen = []
    for page in (1, 2, 3):
        envelope = await paginate(
            db, video_pipeline().sort("created_at"), labels=LABELS, page=page, limit=3
        )
        seen.extend(row.Video.id for row in envelope["videos"])
        assert envelope["total_videos"] == 7
        assert envelope["total_pages"] == 3
    assert len(seen) == 7
    assert set(seen) == {v.id for v in videos}


async def test_envelope_fields(db, make_user, make_video):
    await _seed(make_user, make_video, 5)
    envelope = await paginate(db, video_pipeline().sort("created_at"), labels=LABELS, page=2, limit=2)
    assert len(envelope["videos"]) == 2
    assert envelope["limit"] == 2
    assert envelope["page"] == 2
    assert envelope["paging_counter"] == 3
    assert envelope["has_prev_page"] is True
    assert envelope["has_next_page"] is True
    assert envelope["prev_page"] == 1
    assert envelope["next_page"] == 3


async def test_last_page_is_partial(db, make_user, make_video):
    await _seed(make_user, make_video, 5)
    envelope = await paginate(db, video_pipeline(), labels=LABELS, page=3, limit=2)
    assert len(envelope["videos"]) == 1
    assert envelope["has_next_page"] is False
    assert envelope["next_page"] is None


async def test_page_past_the_end_is_empty(db, make_user, make_video):
    await _seed(make_user, make_video, 2)
    envelope = await paginate(db, video_pipeline(), labels=LABELS, page=5, limit=2)
    assert envelope["videos"] == []
    assert envelope["total_videos"] == 2


async def test_empty_result(db):
    envelope = await paginate(db, video_pipeline(), labels=LABELS, page=1, limit=10)
    assert envelope["videos"] == []
    assert envelope["total_videos"] == 0
    assert envelope["total_pages"] == 1
    assert envelope["has_prev_page"] is False
    assert envelope["has_next_page"] is False
    assert envelope["prev_page"] is None


async def test_transform_is_applied(db, make_user, make_video):
    await _seed(make_user, make_video, 2)
    envelope = await paginate(
        db, video_pipeline(), labels=LABELS, page=1, limit=10, transform=lambda row: row.Video.title
    )
    assert sorted(envelope["videos"]) == ["video 0", "video 1"]


@pytest.mark.parametrize("page, limit", [(0, 10), (-1, 10), (1, 0), (1, -5)])
async def test_non_positive_page_or_limit_is_rejected(db, page, limit):
    with pytest.raises(ValueError):
        await paginate(db, video_pipeline(), labels=LABELS, page=page, limit=limit)
