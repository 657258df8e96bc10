"""
Typed records for the three document collections.

`*In` models carry the caller-supplied fields of a new document; the plain
models are what the store hands back, with the store-assigned identifier
exposed as `_id` on the wire.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bson import Decimal128, ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import NotFoundError


def _stringify_object_id(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


@dataclass(frozen=True)
class RestaurantRef:
    """Soft reference from a review to a restaurant document."""

    object_id: ObjectId

    @classmethod
    def parse(cls, raw: Any) -> RestaurantRef:
        if isinstance(raw, RestaurantRef):
            return raw
        if isinstance(raw, ObjectId):
            return cls(raw)
        if not isinstance(raw, str) or not ObjectId.is_valid(raw):
            raise NotFoundError(f"Malformed restaurant id: {raw!r}")
        return cls(ObjectId(raw))

    def __str__(self) -> str:
        return str(self.object_id)


# Numbers become strings the way the old mongoose schemas cast them.
class StoredDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(..., alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return _stringify_object_id(value)


# ── Restaurant ───────────────────────────────────────────────────────────


class RestaurantIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    rating: float | None = None


class Restaurant(StoredDocument):
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    rating: float | None = None

    @field_validator("rating", mode="before")
    @classmethod
    def _rating_to_float(cls, value: Any) -> Any:
        # older documents hold Decimal128 ratings
        if isinstance(value, Decimal128):
            return float(value.to_decimal())
        return value


# ── Review ───────────────────────────────────────────────────────────────


class ReviewIn(BaseModel):
    title: str | None = None
    content: str | None = None
    rating: int
    author_name: str | None = None
    date_posted: datetime


class Review(StoredDocument):
    restaurant_id: str | None = None
    title: str | None = None
    content: str | None = None
    rating: int | None = None
    author_name: str | None = None
    date_posted: datetime | None = None

    @field_validator("restaurant_id", mode="before")
    @classmethod
    def _restaurant_id_to_str(cls, value: Any) -> Any:
        return _stringify_object_id(value)


# ── Contact form ─────────────────────────────────────────────────────────


class ContactMessageIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None


class ContactMessage(StoredDocument):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None
