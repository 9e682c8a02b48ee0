"""Pydantic models for users and sessions.

Field names follow Python conventions; the wire format is camelCase, handled
by the alias generator. Unknown fields returned by the server are kept.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Session(BaseModel):
    """An auth session issued by the app environment."""

    model_config = _WIRE_CONFIG

    token: str
    user_id: str | None = None
    creation_dtm: str | None = None
    access_group_keys: list[str] | None = None
    user_agent: Any = None


class User(BaseModel):
    """A user record from the app's users model."""

    model_config = _WIRE_CONFIG

    id: str | None = Field(default=None, alias="_id")
    email: str | None = None
    phone: str | None = None
    name: str | None = None
    provider: str | None = None
    provider_user_id: str | None = None
    profile_picture: str | None = None
    email_verified: bool | None = None
    phone_verified: bool | None = None
    signup_dtm: str | None = None
    last_login_dtm: str | None = None


class UserSession(BaseModel):
    """User and session pair returned by sign-in, sign-up and grant calls.

    ``session`` is absent when sign-up requires email or phone verification.
    """

    model_config = _WIRE_CONFIG

    user: User | None = None
    session: Session | None = None
