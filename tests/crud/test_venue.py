# tests/crud/test_venue.py

from unittest.mock import MagicMock

import pytest

from showlog import crud
from showlog.core.exceptions import (
    ConflictError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from showlog.crud.crud_venue import CRUDVenue
from showlog.models.venue import Venue
from showlog.schemas.transfer import VenueRecord
from showlog.schemas.venue import VenueCreate, VenueUpdate
from tests.utils.concert import create_random_concert
from tests.utils.venue import create_random_venue


def test_create_venue_uses_session():
    """
    The create path adds, commits and refreshes through the session.
    """
    venue_crud = CRUDVenue(Venue)
    db_session = MagicMock()
    db_session.query.return_value.filter.return_value.first.return_value = None
    venue_in = VenueCreate(name="Main Hall", city="Springfield")

    venue_crud.create(db=db_session, obj_in=venue_in)

    db_session.add.assert_called_once()
    db_session.commit.assert_called_once()
    db_session.refresh.assert_called_once()


def test_create_venue_derives_slug(db_session):
    venue = create_random_venue(db_session, name="The Fillmore", city="San Francisco")

    assert venue.id is not None
    assert venue.slug == "the-fillmore"
    assert venue.latitude == 1.5


def test_create_venue_with_colliding_slug_is_conflict(db_session):
    create_random_venue(db_session, name="The Fillmore")

    with pytest.raises(ConflictError):
        create_random_venue(db_session, name="the fillmore!")

    assert db_session.query(Venue).count() == 1


def test_create_venue_with_punctuation_only_name_is_rejected(db_session):
    with pytest.raises(ValidationError):
        crud.venue.create(db_session, obj_in=VenueCreate(name="!!!", city="Nowhere"))


def test_update_venue_rename_rederives_slug(db_session):
    venue = create_random_venue(db_session, name="Old Name")

    updated = crud.venue.update(
        db_session, db_obj=venue, obj_in=VenueUpdate(name="New Name")
    )

    assert updated.slug == "new-name"
    assert crud.venue.get_by_slug(db_session, slug="old-name") is None


def test_update_venue_rename_into_existing_slug_is_conflict(db_session):
    create_random_venue(db_session, name="Taken")
    venue = create_random_venue(db_session, name="Free")

    with pytest.raises(ConflictError):
        crud.venue.update(db_session, db_obj=venue, obj_in=VenueUpdate(name="TAKEN"))


def test_get_by_name_matches_through_slug(db_session):
    venue = create_random_venue(db_session, name="The Fillmore")

    assert crud.venue.get_by_name(db_session, name="the  FILLMORE").id == venue.id
    assert crud.venue.get_by_name(db_session, name="???") is None


def test_upsert_creates_then_updates_in_place(db_session):
    record = VenueRecord(name="Paradiso", city="Amsterdam", latitude=52.36)
    first_id = crud.venue.upsert_by_slug(db_session, obj_in=record)
    db_session.commit()

    changed = VenueRecord(
        name="Paradiso", city="Amsterdam-Centrum", address="Weteringschans 6"
    )
    second_id = crud.venue.upsert_by_slug(db_session, obj_in=changed)
    db_session.commit()
    db_session.expire_all()

    assert first_id == second_id
    venues = db_session.query(Venue).all()
    assert len(venues) == 1
    assert venues[0].city == "Amsterdam-Centrum"
    assert venues[0].address == "Weteringschans 6"
    assert venues[0].latitude == 0.0


def test_upsert_does_not_commit(db_session):
    crud.venue.upsert_by_slug(
        db_session, obj_in=VenueRecord(name="Paradiso", city="Amsterdam")
    )
    db_session.rollback()

    assert db_session.query(Venue).count() == 0


def test_remove_venue_without_concerts(db_session):
    venue = create_random_venue(db_session)

    crud.venue.remove(db_session, id=venue.id)

    assert db_session.query(Venue).count() == 0


def test_remove_venue_with_concerts_is_refused(db_session):
    venue = create_random_venue(db_session)
    concert = create_random_concert(db_session, venue_id=venue.id)

    with pytest.raises(ReferentialIntegrityError):
        crud.venue.remove(db_session, id=venue.id)

    db_session.expire_all()
    assert crud.venue.get(db_session, id=venue.id) is not None
    assert crud.concert.get(db_session, id=concert.id).venue_id == venue.id


def test_remove_missing_venue_is_not_found(db_session):
    with pytest.raises(NotFoundError):
        crud.venue.remove(db_session, id=999)
