from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from ..errors import VerificationError
from ..recaptcha import RecaptchaVerifier
from ..store import DirectoryRepository, RestaurantRef, Review, ReviewIn

logger = logging.getLogger(__name__)

# Every review submitted through the site is stored with this rating; any
# rating sent in the form is ignored.
REVIEW_RATING = 5


class ReviewSubmission(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    token: str | None = Field(None, alias="g-recaptcha-response")
    title: str | None = None
    content: str | None = None
    author: str | None = None


def submit_review(
    repository: DirectoryRepository,
    verifier: RecaptchaVerifier,
    restaurant_id: str,
    submission: ReviewSubmission,
    check_restaurant: bool = False,
    remote_ip: str | None = None,
) -> Review:
    """
    Verify, build and store a review for `restaurant_id`.

    Raises `VerificationError` when the token is not accepted (nothing is
    stored), `NotFoundError` for a malformed id or, with `check_restaurant`,
    a missing restaurant, and `PersistenceError` when the insert fails.
    """
    result = verifier.check(submission.token, remote_ip=remote_ip)
    if not result.success:
        raise VerificationError(result.reason.value, list(result.error_codes))

    restaurant = RestaurantRef.parse(restaurant_id)
    review = ReviewIn(
        title=submission.title,
        content=submission.content,
        rating=REVIEW_RATING,
        author_name=submission.author,
        date_posted=datetime.now(timezone.utc),
    )
    stored = repository.create_review(restaurant, review, check_restaurant=check_restaurant)
    logger.info("Stored review %s for restaurant %s", stored.id, restaurant)
    return stored
