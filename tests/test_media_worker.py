import logging

from vidtube.services.storage_service import schedule_media_cleanup
from vidtube.workers.media import delete_media


def test_delete_media_removes_stored_files(storage):
    stored = storage.save("user-1", "thumbnails", b"img", ".jpg")
    path = storage.base_dir / stored.url.split("/uploads/", 1)[1]
    assert path.exists()

    removed = delete_media.run([stored.url, "http://media.test/uploads/users/user-1/thumbnails/missing.jpg"])
    assert removed == 1
    assert not path.exists()


def test_delete_media_refuses_paths_outside_upload_dir(storage, tmp_path):
    outside = tmp_path.parent / "outside.txt"
    outside.write_text("keep me")
    removed = delete_media.run(["http://media.test/uploads/../outside.txt"])
    assert removed == 0
    assert outside.exists()


def test_schedule_media_cleanup_skips_empty_urls(cleanup_calls):
    schedule_media_cleanup(None, "")
    assert cleanup_calls == []
    schedule_media_cleanup("http://media.test/uploads/a.jpg", None)
    assert cleanup_calls == [["http://media.test/uploads/a.jpg"]]


def test_schedule_media_cleanup_logs_broker_failures(monkeypatch, caplog):
    def unavailable(urls):
        raise ConnectionError("broker down")

    monkeypatch.setattr(delete_media, "delay", unavailable)
    with caplog.at_level(logging.WARNING):
        schedule_media_cleanup("http://media.test/uploads/a.jpg")
    assert "Failed to enqueue media cleanup" in caplog.text
