"""Tests for UnitOfWork commit/rollback."""

import pytest
from ordering.uow import UnitOfWork


class Boom(Exception):
    pass


def test_commits_on_clean_exit(uow_factory, make_user, make_product):
    user_id, product_id = make_user(), make_product()

    with uow_factory() as uow:
        uow.carts.add_one(user_id, product_id)

    with uow_factory() as uow:
        assert uow.carts.get(user_id).quantity_of(product_id) == 1


def test_rolls_back_everything_when_the_block_raises(uow_factory, make_user, make_product):
    user_id, product_id = make_user(), make_product()

    with pytest.raises(Boom):
        with uow_factory() as uow:
            uow.carts.add_one(user_id, product_id)
            uow.carts.add_one(user_id, product_id)
            raise Boom()

    with uow_factory() as uow:
        assert uow.carts.get(user_id).is_empty


def test_session_is_released_after_exit(uow_factory):
    uow = uow_factory()
    with uow:
        assert uow.session is not None
    assert uow.session is None


def test_adapters_can_be_substituted(database):
    calls = []

    class RecordingCatalog:
        def __init__(self, session):
            calls.append(session)

        def get(self, product_id):
            raise AssertionError("not used")

    with UnitOfWork(database, catalog=RecordingCatalog) as uow:
        assert isinstance(uow.catalog, RecordingCatalog)
        assert calls == [uow.session]
