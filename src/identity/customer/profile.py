"""Customer profile and the shipping snapshot taken from it at checkout.

The profile is owned by identity; ordering only ever sees a ``ShippingSnapshot``,
a frozen copy of the address fields. Once an order records that snapshot, later
profile edits do not affect where the order was shipped.
"""

from dataclasses import dataclass, fields
from typing import Protocol

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, Session, mapped_column

from shared.db import Base
from shared.errors import NotFoundError


class ProfileRecord(Base):
    __tablename__ = "profiles"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.user_id"), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    address: Mapped[str | None] = mapped_column(String(200), nullable=True)
    city: Mapped[str | None] = mapped_column(String(50), nullable=True)
    state: Mapped[str | None] = mapped_column(String(2), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)


@dataclass(frozen=True)
class Profile:
    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None

    @classmethod
    def from_record(cls, record: ProfileRecord) -> "Profile":
        return cls(**{f.name: getattr(record, f.name) for f in fields(cls)})


@dataclass(frozen=True)
class ShippingSnapshot:
    """Destination fields copied from a profile at a point in time."""

    address: str | None
    city: str | None
    state: str | None
    zip: str | None

    @classmethod
    def from_record(cls, record: ProfileRecord) -> "ShippingSnapshot":
        return cls(address=record.address, city=record.city, state=record.state, zip=record.zip)


class ProfileReader(Protocol):
    def get(self, user_id: int) -> ShippingSnapshot: ...


class SqlProfileReader:
    def __init__(self, session: Session):
        self._session = session

    def get(self, user_id: int) -> ShippingSnapshot:
        record = self._session.get(ProfileRecord, user_id)
        if record is None:
            raise NotFoundError({"profile": [f"No shipping profile for user {user_id}"]})
        return ShippingSnapshot.from_record(record)


class SqlProfileStore:
    """Profile field storage behind ``GET``/``PUT /profile``."""

    def __init__(self, session: Session):
        self._session = session

    def get(self, user_id: int) -> Profile:
        record = self._session.get(ProfileRecord, user_id)
        if record is None:
            raise NotFoundError({"profile": [f"No profile for user {user_id}"]})
        return Profile.from_record(record)

    def save(self, profile: Profile) -> Profile:
        record = self._session.get(ProfileRecord, profile.user_id)
        if record is None:
            record = ProfileRecord(user_id=profile.user_id)
            self._session.add(record)
        for f in fields(Profile):
            if f.name != "user_id":
                setattr(record, f.name, getattr(profile, f.name))
        self._session.flush()
        return Profile.from_record(record)
