import os
from decimal import Decimal
from functools import partial
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the settings overlay before anything imports ``shared.config``, then
    initialize the ordering domain and push its context for the whole session, so
    `current_domain` resolves in tests that build cart and order value objects.
    """
    os.environ["STOREFRONT_ENV"] = session.config.option.env

    from ordering.domain import ordering

    ordering.init()
    ordering.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Configuration and database
# ---------------------------------------------------------------------------
@pytest.fixture()
def settings(request, tmp_path):
    from shared.config import Settings

    return Settings(
        _env_file=None,
        env=request.config.option.env,
        database_uri=f"sqlite:///{tmp_path / 'storefront.db'}",
        jwt_secret="test-secret",
    )


@pytest.fixture()
def database(settings):
    """A fresh file-backed SQLite database per test, schema created and dropped around it."""
    from shared.db import Database, drop_db, setup_db

    db = Database(settings.database_uri)
    setup_db(db)

    yield db

    drop_db(db)
    db.dispose()


@pytest.fixture()
def uow_factory(database):
    from ordering.uow import UnitOfWork

    return partial(UnitOfWork, database)


# ---------------------------------------------------------------------------
# Data factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product(database):
    from catalogue.product.product import ProductRecord

    def _make(
        name="Smartphone",
        price="19.99",
        discount_percent="0.00",
        stock=50,
        product_id=None,
        **extra,
    ) -> int:
        with database.session() as session, session.begin():
            record = ProductRecord(
                product_id=product_id,
                name=name,
                price=Decimal(price),
                discount_percent=Decimal(discount_percent),
                stock=stock,
                **extra,
            )
            session.add(record)
            session.flush()
            return record.product_id

    return _make


@pytest.fixture()
def make_user(database):
    from identity.customer.user import UserRecord

    def _make(username="joe") -> int:
        with database.session() as session, session.begin():
            record = UserRecord(username=username)
            session.add(record)
            session.flush()
            return record.user_id

    return _make


@pytest.fixture()
def make_profile(database):
    from identity.customer.profile import ProfileRecord

    def _make(user_id, address="1 Main St", city="Springfield", state="IL", zip="62701", **extra) -> None:
        with database.session() as session, session.begin():
            session.add(ProfileRecord(user_id=user_id, address=address, city=city, state=state, zip=zip, **extra))

    return _make


@pytest.fixture()
def set_price(database):
    from catalogue.product.product import ProductRecord

    def _set(product_id, price, discount_percent=None) -> None:
        with database.session() as session, session.begin():
            record = session.get(ProductRecord, product_id)
            record.price = Decimal(price)
            if discount_percent is not None:
                record.discount_percent = Decimal(discount_percent)

    return _set


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def app(settings, database):
    from app import create_app

    return create_app(settings=settings, database=database)


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(settings):
    from identity.auth.tokens import issue_token

    def _headers(username="joe") -> dict:
        return {"Authorization": f"Bearer {issue_token(username, settings)}"}

    return _headers
