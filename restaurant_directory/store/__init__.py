"""
Document store access layer.

Responsibilities:
- Own the MongoDB client and its open/close lifecycle.
- Map restaurant, review and contact documents to typed models.
- Translate malformed identifiers and store failures into directory errors.
"""

from .client import MongoStore
from .models import (
    ContactMessage,
    ContactMessageIn,
    Restaurant,
    RestaurantIn,
    RestaurantRef,
    Review,
    ReviewIn,
)
from .repository import DirectoryRepository

__all__ = [
    "ContactMessage",
    "ContactMessageIn",
    "DirectoryRepository",
    "MongoStore",
    "Restaurant",
    "RestaurantIn",
    "RestaurantRef",
    "Review",
    "ReviewIn",
]
