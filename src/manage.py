"""Storefront database management CLI.

Creates, drops and seeds the schema of the database named by ``STOREFRONT_DATABASE_URI``,
and issues bearer tokens for existing users.

Usage:
    python src/manage.py setup-db                  # Create all tables
    python src/manage.py drop-db                   # Drop all tables
    python src/manage.py seed-db                   # Demo products, user and profile
    python src/manage.py issue-token --username joe
"""

import argparse
import sys
from decimal import Decimal

from sqlalchemy import select

from shared.config import get_settings
from shared.db import Database, drop_db, setup_db

DEMO_PRODUCTS = [
    {
        "name": "Smartphone",
        "price": Decimal("19.99"),
        "category_id": 1,
        "description": "A powerful and feature-rich smartphone.",
        "subcategory": "Black",
        "stock": 50,
        "featured": True,
        "image_url": "smartphone.jpg",
    },
    {
        "name": "Laptop",
        "price": Decimal("899.00"),
        "discount_percent": Decimal("10.00"),
        "category_id": 1,
        "description": "A lightweight laptop for work and play.",
        "subcategory": "Silver",
        "stock": 12,
        "image_url": "laptop.jpg",
    },
    {
        "name": "Coffee Mug",
        "price": Decimal("8.50"),
        "category_id": 3,
        "description": "Holds coffee. Or tea.",
        "subcategory": "White",
        "stock": 200,
        "image_url": "mug.jpg",
    },
]

DEMO_USER = "joe"

DEMO_PROFILE = {
    "first_name": "Joe",
    "last_name": "Joesephus",
    "phone": "800-555-1234",
    "email": "joejoesephus@email.com",
    "address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip": "62701",
}


def _database() -> Database:
    settings = get_settings()
    return Database(settings.database_uri, echo=settings.database_echo)


def setup_database():
    """Create all tables."""
    database = _database()
    print(f"Creating schema in {database.database_uri}...")
    setup_db(database)
    print("Done.")


def drop_database():
    """Drop all tables."""
    database = _database()
    print(f"Dropping schema in {database.database_uri}...")
    drop_db(database)
    print("Done.")


def seed_database():
    """Insert demo products and a demo user with a shipping profile. Safe to re-run."""
    from catalogue.product.product import ProductRecord
    from identity.customer.profile import ProfileRecord
    from identity.customer.user import UserRecord

    database = _database()
    setup_db(database)

    with database.session() as session, session.begin():
        existing = set(session.scalars(select(ProductRecord.name)))
        for product in DEMO_PRODUCTS:
            if product["name"] not in existing:
                session.add(ProductRecord(**product))
                print(f"  product {product['name']}")

        user = session.scalars(select(UserRecord).where(UserRecord.username == DEMO_USER)).one_or_none()
        if user is None:
            user = UserRecord(username=DEMO_USER)
            session.add(user)
            session.flush()
            print(f"  user {DEMO_USER} (id {user.user_id})")

        if session.get(ProfileRecord, user.user_id) is None:
            session.add(ProfileRecord(user_id=user.user_id, **DEMO_PROFILE))
            print(f"  profile for {DEMO_USER}")

    print("Done.")


def issue_token_for(username: str) -> int:
    from identity.auth.tokens import issue_token
    from identity.customer.user import UserRecord

    settings = get_settings()
    database = _database()
    with database.session() as session:
        user_id = session.scalar(select(UserRecord.user_id).where(UserRecord.username == username))

    if user_id is None:
        print(f"No such user: {username}", file=sys.stderr)
        return 1

    print(issue_token(username, settings))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-db", help="Create tables and insert demo data")

    token_parser = subparsers.add_parser("issue-token", help="Print a bearer token for an existing user")
    token_parser.add_argument("--username", required=True, help="Username to issue the token for")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-db":
        seed_database()
    elif args.command == "issue-token":
        sys.exit(issue_token_for(args.username))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
