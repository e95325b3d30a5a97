from datetime import date

from starlette.testclient import TestClient

from tests.utils.concert import create_random_concert
from tests.utils.venue import create_random_venue


def test_list_concerts_newest_first(test_client: TestClient, db_session) -> None:
    venue = create_random_venue(db_session, name="The Fillmore", city="San Francisco")
    create_random_concert(db_session, venue.id, artist="Old Band", show_date=date(2001, 1, 1))
    create_random_concert(db_session, venue.id, artist="New Band", show_date=date(2021, 1, 1))

    response = test_client.get("/api/")

    assert response.status_code == 200
    content = response.json()
    assert [c["artist"] for c in content] == ["New Band", "Old Band"]
    assert content[0]["artistSlug"] == "new-band"
    assert content[0]["venueId"] == venue.id
    assert content[0]["venue"]["name"] == "The Fillmore"
    assert content[0]["date"] == "2021-01-01"


def test_search_concerts(test_client: TestClient, db_session) -> None:
    venue = create_random_venue(db_session, name="Paradiso", city="Amsterdam")
    create_random_concert(db_session, venue.id, artist="Air")
    create_random_concert(db_session, venue.id, artist="Low", event_name="Amsterdam Dance Event")

    response = test_client.get("/api/", params={"q": "dance"})

    assert [c["artist"] for c in response.json()] == ["Low"]


def test_get_concert(test_client: TestClient, db_session) -> None:
    venue = create_random_venue(db_session)
    concert = create_random_concert(db_session, venue.id, artist="Radiohead", setlist="https://setlist.fm/x")

    response = test_client.get(f"/api/concerts/{concert.id}")

    assert response.status_code == 200
    content = response.json()
    assert content["id"] == concert.id
    assert content["setlist"] == "https://setlist.fm/x"
    assert content["type"] == "concert"
    assert content["gallery"] == []


def test_get_missing_concert_is_404(test_client: TestClient) -> None:
    response = test_client.get("/api/concerts/999")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_artist_concerts(test_client: TestClient, db_session) -> None:
    venue = create_random_venue(db_session)
    create_random_concert(db_session, venue.id, artist="Sigur Rós", show_date=date(2008, 1, 1))
    create_random_concert(db_session, venue.id, artist="Sigur Ros", show_date=date(2013, 1, 1))
    create_random_concert(db_session, venue.id, artist="Someone Else")

    response = test_client.get("/api/artists/sigur-ros")

    assert response.status_code == 200
    assert [c["date"] for c in response.json()] == ["2013-01-01", "2008-01-01"]
    assert test_client.get("/api/artists/nobody").json() == []
