"""Request bodies accepted by the player routes."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class PlayerProfile(BaseModel):
    # Unknown keys in a request body are dropped, not rejected
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, coerce_numbers_to_str=True)

    instagram_handle: str | None = Field(default=None, max_length=64)
    profile_image_url: str | None = Field(default=None, max_length=512)
    bio: str | None = None
    height_inches: int | None = Field(default=None, ge=0)
    weight_lbs: int | None = Field(default=None, ge=0)
    position: str | None = Field(default=None, max_length=32)
    date_of_birth: date | None = None
    city: str | None = Field(default=None, max_length=64)
    state: str | None = Field(default=None, max_length=64)


class PlayerCreate(PlayerProfile):
    name: str = Field(min_length=1, max_length=128)


class PlayerUpdate(PlayerProfile):
    """Partial update; only keys present in the body are applied."""

    name: str = Field(default=None, min_length=1, max_length=128)
