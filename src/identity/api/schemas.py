"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from identity.customer.profile import Profile


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Joe",
                    "last_name": "Joesephus",
                    "phone": "800-555-1234",
                    "email": "joejoesephus@email.com",
                    "address": "1 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "zip": "62701",
                }
            ]
        }
    }

    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=50)
    state: str | None = Field(None, max_length=2)
    zip: str | None = Field(None, max_length=20)


class ProfileResponse(BaseModel):
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
    def from_profile(cls, profile: Profile) -> ProfileResponse:
        return cls(
            user_id=profile.user_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone=profile.phone,
            email=profile.email,
            address=profile.address,
            city=profile.city,
            state=profile.state,
            zip=profile.zip,
        )
