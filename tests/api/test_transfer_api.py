from starlette.testclient import TestClient

from showlog.models.concert import Concert
from showlog.models.venue import Venue

EXAMPLE_DOC = {
    "venues": [
        {"name": "The Fillmore", "city": "San Francisco", "latitude": 37.78, "longitude": -122.43}
    ],
    "concerts": [
        {"artist": "Radiohead", "date": "2016-03-15", "venueName": "The Fillmore", "type": "concert"}
    ],
}


def test_import_then_stats(test_client: TestClient) -> None:
    response = test_client.post("/api/import", json=EXAMPLE_DOC)

    assert response.status_code == 200
    content = response.json()
    assert content["importedVenues"] == 1
    assert content["importedConcerts"] == 1

    stats = test_client.get("/api/stats").json()
    assert stats["totalConcerts"] == 1
    assert stats["showsByYear"] == [{"year": 2016, "count": 1}]
    assert stats["showsByCity"] == [{"city": "San Francisco", "count": 1}]
    assert stats["firstShow"]["artist"] == "Radiohead"
    assert stats["firstShow"]["venue"]["name"] == "The Fillmore"
    assert stats["latestShow"]["id"] == stats["firstShow"]["id"]
    assert stats["topArtists"] == [{"name": "Radiohead", "slug": "radiohead", "count": 1}]
    assert stats["topVenues"] == [
        {"name": "The Fillmore", "city": "San Francisco", "slug": "the-fillmore", "count": 1}
    ]


def test_import_unknown_venue_fails_without_changes(test_client: TestClient, db_session) -> None:
    doc = {
        "venues": [],
        "concerts": [{"artist": "Radiohead", "date": "2016-03-15", "venueName": "Nonexistent Hall"}],
    }

    response = test_client.post("/api/import", json=doc)

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "not_found"
    assert "Nonexistent Hall" in body["message"]
    assert db_session.query(Venue).count() == 0
    assert db_session.query(Concert).count() == 0


def test_import_partial_failure_is_transaction_aborted(test_client: TestClient, db_session) -> None:
    doc = {
        "venues": EXAMPLE_DOC["venues"],
        "concerts": EXAMPLE_DOC["concerts"] + [{"artist": "Air", "venueName": "The Fillmore"}],
    }

    response = test_client.post("/api/import", json=doc)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "transaction_aborted"
    assert body["cause"] == "validation_error"
    assert "Concert #2" in body["message"]
    assert db_session.query(Venue).count() == 0
    assert db_session.query(Concert).count() == 0


def test_import_requires_both_arrays(test_client: TestClient) -> None:
    response = test_client.post("/api/import", json={"venues": []})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_export_round_trip(test_client: TestClient) -> None:
    test_client.post("/api/import", json=EXAMPLE_DOC)

    exported = test_client.get("/api/export")

    assert exported.status_code == 200
    document = exported.json()
    assert document["venues"][0]["name"] == "The Fillmore"
    assert document["concerts"][0]["venueName"] == "The Fillmore"
    assert document["concerts"][0]["date"] == "2016-03-15"

    # Re-importing the export updates venues in place and adds the concerts again
    again = test_client.post("/api/import", json=document)
    assert again.status_code == 200
    venues = test_client.get("/api/venues").json()
    assert len(venues) == 1
