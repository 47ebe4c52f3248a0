"""Tests for profile storage and the shipping snapshot read by checkout."""

import pytest
from identity.customer.profile import Profile, SqlProfileReader, SqlProfileStore
from shared.errors import NotFoundError


@pytest.fixture()
def user_id(make_user):
    return make_user("joe")


class TestProfileStore:
    def test_save_creates_profile(self, database, user_id):
        with database.session() as session, session.begin():
            saved = SqlProfileStore(session).save(Profile(user_id=user_id, first_name="Joe", city="Springfield"))

        assert saved.first_name == "Joe"
        with database.session() as session:
            assert SqlProfileStore(session).get(user_id) == saved

    def test_save_replaces_every_field(self, database, user_id, make_profile):
        make_profile(user_id, address="1 Main St", city="Springfield", phone="800-555-1234")

        with database.session() as session, session.begin():
            SqlProfileStore(session).save(Profile(user_id=user_id, address="2 Elm St", city="Shelbyville"))

        with database.session() as session:
            profile = SqlProfileStore(session).get(user_id)
        assert (profile.address, profile.city, profile.phone) == ("2 Elm St", "Shelbyville", None)

    def test_missing_profile(self, database, user_id):
        with database.session() as session:
            with pytest.raises(NotFoundError):
                SqlProfileStore(session).get(user_id)


class TestProfileReader:
    def test_shipping_snapshot(self, database, user_id, make_profile):
        make_profile(user_id, address="1 Main St", city="Springfield", state="IL", zip="62701")

        with database.session() as session:
            snapshot = SqlProfileReader(session).get(user_id)

        assert (snapshot.address, snapshot.city, snapshot.state, snapshot.zip) == (
            "1 Main St",
            "Springfield",
            "IL",
            "62701",
        )

    def test_no_shipping_profile(self, database, user_id):
        with database.session() as session:
            with pytest.raises(NotFoundError) as exc:
                SqlProfileReader(session).get(user_id)
        assert "profile" in exc.value.messages
