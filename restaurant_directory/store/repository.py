from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, TypeVar

from pydantic import BaseModel, ValidationError
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..errors import NotFoundError, PersistenceError
from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .models import (
    ContactMessage,
    ContactMessageIn,
    Restaurant,
    RestaurantIn,
    RestaurantRef,
    Review,
    ReviewIn,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        logger.warning("Document store failed to %s", action, exc_info=True)
        raise PersistenceError(f"Failed to {action}") from exc


def _load_many(model: type[ModelT], docs: list[dict[str, Any]]) -> list[ModelT]:
    """Validate documents, skipping any that another writer left unreadable."""
    records = []
    for doc in docs:
        try:
            records.append(model.model_validate(doc))
        except ValidationError:
            logger.warning("Skipping unreadable %s document %s", model.__name__, doc.get("_id"), exc_info=True)
    return records


def _load_one(model: type[ModelT], doc: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(doc)
    except ValidationError as exc:
        logger.warning("Unreadable %s document %s", model.__name__, doc.get("_id"), exc_info=True)
        raise PersistenceError(f"Unreadable {model.__name__} document") from exc


class DirectoryRepository:
    """
    Data access over the restaurants, reviews and contact collections.

    Each call is one round trip to the store. Malformed identifiers are
    reported as `NotFoundError`; driver failures as `PersistenceError`.
    """

    def __init__(self, database: Database, config: StoreConfig = DEFAULT_STORE_CONFIG) -> None:
        self._restaurants = database[config.restaurants_collection]
        self._reviews = database[config.reviews_collection]
        self._contacts = database[config.contacts_collection]

    # ── Restaurants ──────────────────────────────────────────────────────

    def list_restaurants(self) -> list[Restaurant]:
        with _store_errors("list restaurants"):
            docs = list(self._restaurants.find())
        return _load_many(Restaurant, docs)

    def get_restaurant(self, restaurant_id: str | RestaurantRef) -> Restaurant:
        ref = RestaurantRef.parse(restaurant_id)
        with _store_errors("read restaurant"):
            doc = self._restaurants.find_one({"_id": ref.object_id})
        if doc is None:
            raise NotFoundError(f"Restaurant {ref} does not exist")
        return _load_one(Restaurant, doc)

    def create_restaurant(self, fields: RestaurantIn) -> Restaurant:
        doc = fields.model_dump()
        with _store_errors("create restaurant"):
            result = self._restaurants.insert_one(doc)
        return Restaurant.model_validate({**doc, "_id": result.inserted_id})

    def delete_restaurant(self, restaurant_id: str) -> int:
        """
        Delete at most one restaurant and return how many were removed.

        A well-formed id that matches nothing is not an error: the delete
        simply removes zero documents.
        """
        ref = RestaurantRef.parse(restaurant_id)
        with _store_errors("delete restaurant"):
            result = self._restaurants.delete_one({"_id": ref.object_id})
        if result.deleted_count == 0:
            logger.debug("Delete matched no restaurant for id %s", ref)
        return result.deleted_count

    # ── Reviews ──────────────────────────────────────────────────────────

    def list_reviews_for_restaurant(self, restaurant_id: str | RestaurantRef) -> list[Review]:
        ref = RestaurantRef.parse(restaurant_id)
        with _store_errors("list reviews"):
            docs = list(self._reviews.find({"restaurant_id": ref.object_id}))
        return _load_many(Review, docs)

    def create_review(
        self,
        restaurant: RestaurantRef,
        fields: ReviewIn,
        check_restaurant: bool = False,
    ) -> Review:
        if check_restaurant:
            with _store_errors("check review restaurant"):
                exists = self._restaurants.count_documents({"_id": restaurant.object_id}, limit=1)
            if not exists:
                raise NotFoundError(f"Restaurant {restaurant} does not exist")

        doc = {"restaurant_id": restaurant.object_id, **fields.model_dump()}
        with _store_errors("create review"):
            result = self._reviews.insert_one(doc)
        return Review.model_validate({**doc, "_id": result.inserted_id})

    # ── Contact form ─────────────────────────────────────────────────────

    def create_contact_message(self, fields: ContactMessageIn) -> ContactMessage:
        doc = fields.model_dump()
        with _store_errors("save contact message"):
            result = self._contacts.insert_one(doc)
        return ContactMessage.model_validate({**doc, "_id": result.inserted_id})

