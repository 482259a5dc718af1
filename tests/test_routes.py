"""
Tests for the local JSON API the desktop shell calls.
"""
import json

from hianime_desktop.core.errors import TransportError

from .conftest import BASE_URL, DETAIL_HTML, GENRES_HTML

FRIEREN = {"id": "frieren-18542", "title": "Frieren"}


def test_home_returns_three_sections(http):
    rv = http.get("/api/home")

    assert rv.status_code == 200
    body = rv.get_json()
    assert set(body["data"]) == {"trending", "newReleases", "ongoing"}
    assert body["counts"] == {"trending": 3, "newReleases": 3, "ongoing": 3}


def test_home_with_failing_site_is_still_200(http, client):
    client.fetch.side_effect = TransportError(f"{BASE_URL}/home", status=500)

    rv = http.get("/api/home")

    assert rv.status_code == 200
    assert rv.get_json()["counts"] == {"trending": 0, "newReleases": 0, "ongoing": 0}


def test_trending_is_served_from_cache(http, client):
    http.get("/api/trending")
    rv = http.get("/api/trending")

    assert rv.status_code == 200
    assert len(rv.get_json()) == 3
    assert client.fetch.await_count == 1


def test_search_records_history(http, storage):
    rv = http.get("/api/search?q=frieren&page=2")

    body = rv.get_json()
    assert body["query"] == "frieren"
    assert body["page"] == 2
    assert len(body["results"]) == 3
    assert storage.get_search_history() == ["frieren"]


def test_blank_search(http, client, storage):
    rv = http.get("/api/search?q=%20%20")

    assert rv.get_json()["results"] == []
    client.fetch.assert_not_awaited()
    assert storage.get_search_history() == []


def test_anime_details_and_favorite_flag(http, client, storage):
    client.fetch.return_value = DETAIL_HTML
    storage.add_to_favorites(FRIEREN)

    rv = http.get("/api/anime/frieren-18542")

    body = rv.get_json()
    assert rv.status_code == 200
    assert body["id"] == "frieren-18542"
    assert body["isFavorite"] is True
    assert body["genres"] == ["Adventure", "Drama", "Fantasy"]


def test_anime_details_failure_is_404(http, client):
    client.fetch.side_effect = TransportError("x", status=404)

    assert http.get("/api/anime/missing").status_code == 404


def test_episode_sources_include_preferences(http, client, storage):
    client.fetch.return_value = json.dumps({"link": "http://x/video.mp4"})
    storage.set_setting("defaultQuality", "720p")

    body = http.get("/api/episodes/107257/sources").get_json()

    assert body["sources"][0]["url"] == "http://x/video.mp4"
    assert body["defaultQuality"] == "720p"
    assert body["defaultSubtitleLang"] == "en"


def test_genres_and_genre_listing(http, client):
    client.fetch.return_value = GENRES_HTML
    assert http.get("/api/genres").get_json()[0]["name"] == "Action"

    body = http.get("/api/genres/Action?page=bogus").get_json()
    assert body["genre"] == "Action"
    assert body["page"] == 1


def test_schedule(http):
    body = http.get("/api/schedule").get_json()

    assert body["monday"] == []
    assert len(body) == 7


def test_cache_stats_and_clear(http):
    http.get("/api/trending")
    assert http.get("/api/cache/stats").get_json()["total_entries"] == 1

    assert http.post("/api/cache/clear").get_json() == {"success": True}
    assert http.get("/api/cache/stats").get_json()["total_entries"] == 0


def test_favorites_crud(http):
    assert http.post("/api/favorites", json={"anime": FRIEREN}).status_code == 201
    assert http.post("/api/favorites", json=FRIEREN).get_json()["added"] is False
    assert http.post("/api/favorites", json={"title": "no id"}).status_code == 400

    assert http.get("/api/favorites/frieren-18542").get_json()["title"] == "Frieren"
    assert len(http.get("/api/favorites").get_json()) == 1

    assert http.delete("/api/favorites/frieren-18542").status_code == 200
    assert http.delete("/api/favorites/frieren-18542").status_code == 404


def test_history_and_continue_watching(http):
    http.post("/api/history", json={"anime": FRIEREN, "episode": 4})
    assert http.get("/api/history").get_json()[0]["lastEpisode"] == 4
    http.delete("/api/history")
    assert http.get("/api/history").get_json() == []

    http.post("/api/continue-watching", json={"anime": FRIEREN, "episode": 2, "progress": 0.3})
    assert http.get("/api/continue-watching").get_json()[0]["progress"] == 0.3
    assert http.post(
        "/api/continue-watching", json={"anime": FRIEREN, "progress": "half"}
    ).status_code == 400
    http.delete("/api/continue-watching/frieren-18542")
    assert http.get("/api/continue-watching").get_json() == []


def test_downloads_endpoints(http):
    rv = http.post(
        "/api/downloads",
        json={"anime": FRIEREN, "episode": {"number": 1}, "filePath": "/tmp/f1.mp4"},
    )
    assert rv.status_code == 201
    assert rv.get_json()["id"] == "frieren-18542-1"

    assert http.patch("/api/downloads/frieren-18542-1", json={"status": "completed"}).status_code == 200
    assert http.patch("/api/downloads/frieren-18542-1", json={"status": "weird"}).status_code == 400
    assert http.patch("/api/downloads/nope", json={"progress": 1}).status_code == 404
    assert http.patch("/api/downloads/frieren-18542-1", json={"id": "other"}).status_code == 200
    assert [d["id"] for d in http.get("/api/downloads").get_json()] == ["frieren-18542-1"]
    assert http.get("/api/stats").get_json()["completedDownloads"] == 1

    assert http.delete("/api/downloads/frieren-18542-1").status_code == 200
    assert http.post("/api/downloads", json={"anime": FRIEREN}).status_code == 400


def test_settings_endpoints(http):
    assert http.get("/api/settings").get_json()["theme"] == "dark"

    rv = http.put("/api/settings", json={"theme": "light"})
    assert rv.get_json()["theme"] == "light"

    assert http.put("/api/settings/autoplayNext", json={"value": False}).status_code == 200
    assert http.get("/api/settings/autoplayNext").get_json() == {"key": "autoplayNext", "value": False}
    assert http.get("/api/settings/unknown").status_code == 404
    assert http.put("/api/settings/theme", json={}).status_code == 400

    assert http.post("/api/settings/reset").get_json()["theme"] == "dark"


def test_export_import_and_reset(http, storage):
    storage.add_to_favorites(FRIEREN)
    exported = http.get("/api/export").get_data(as_text=True)

    http.post("/api/reset")
    assert storage.get_favorites() == []

    assert http.post("/api/import", data=exported, content_type="application/json").status_code == 200
    assert storage.is_favorite("frieren-18542")
    assert http.post("/api/import", data="garbage").status_code == 400


def test_notifications_drain(http, app):
    app.notifications.push_new_episode(FRIEREN, "13")

    assert len(http.get("/api/notifications").get_json()) == 1
    assert http.get("/api/notifications").get_json() == []


def test_unknown_route_is_json_404(http):
    rv = http.get("/api/does-not-exist")

    assert rv.status_code == 404
    assert rv.get_json()["success"] is False


def test_scheduler_not_started_under_testing_config(app):
    assert not app.cache_sweeper.is_running
    assert not app.episode_checker.is_running
