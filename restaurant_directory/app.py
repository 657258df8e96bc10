from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from .config import DEFAULT_APP_CONFIG, AppConfig
from .dependencies import get_app_config, get_repository, get_verifier, read_body
from .errors import NotFoundError, PersistenceError, VerificationError
from .recaptcha import RecaptchaVerifier
from .reviews.workflow import ReviewSubmission, submit_review
from .store import (
    ContactMessageIn,
    DirectoryRepository,
    MongoStore,
    Restaurant,
    RestaurantIn,
)

logger = logging.getLogger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent
_STATIC_DIR = _PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(_PACKAGE_DIR / "templates"))

RESTAURANT_MISSING = "Restaurant doesn't exist"
RESTAURANT_MISSING_API = "Restaurant doesn't exist!"
RECAPTCHA_FAILED = "Failed to verify recaptcha. Please try again."
REVIEW_NOT_SAVED = "Failed to post review"
INVALID_SUBMISSION = "Some of the submitted fields could not be read."
STORE_UNAVAILABLE = "Something went wrong. Please try again later."

router = APIRouter()


def _error_page(request: Request, message: str, status_code: int):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Error", "error": message},
        status_code=status_code,
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Templating routes ────────────────────────────────────────────────────


@router.get("/")
def home(request: Request, repository: DirectoryRepository = Depends(get_repository)):
    restaurants = repository.list_restaurants()
    logger.debug("Home page listing %d restaurants", len(restaurants))
    return templates.TemplateResponse(
        request,
        "index.html",
        {"title": "Home Page", "restaurants": restaurants},
    )


@router.post("/")
def contact(
    request: Request,
    body: dict[str, Any] = Depends(read_body),
    repository: DirectoryRepository = Depends(get_repository),
):
    try:
        fields = ContactMessageIn.model_validate(body)
    except ValidationError:
        return _error_page(request, INVALID_SUBMISSION, 400)
    repository.create_contact_message(fields)
    return RedirectResponse(url="/", status_code=303)


@router.get("/restaurants")
def restaurant_list(
    request: Request,
    repository: DirectoryRepository = Depends(get_repository),
    config: AppConfig = Depends(get_app_config),
):
    restaurants = repository.list_restaurants()
    return templates.TemplateResponse(
        request,
        "list.html",
        {"title": "List of Restaurants", "restaurants": restaurants[: config.listing_limit]},
    )


@router.get("/restaurants/{restaurant_id}/reviews")
def restaurant_reviews(
    restaurant_id: str,
    request: Request,
    repository: DirectoryRepository = Depends(get_repository),
):
    try:
        restaurant = repository.get_restaurant(restaurant_id)
    except NotFoundError:
        return _error_page(request, RESTAURANT_MISSING, 404)

    reviews = repository.list_reviews_for_restaurant(restaurant.id)
    return templates.TemplateResponse(
        request,
        "reviews.html",
        {
            "current": restaurant,
            "title": f"{restaurant.title} Reviews",
            "reviews": reviews,
        },
    )


@router.get("/restaurants/{restaurant_id}/reviews/create")
def review_form(
    restaurant_id: str,
    request: Request,
    repository: DirectoryRepository = Depends(get_repository),
    verifier: RecaptchaVerifier = Depends(get_verifier),
):
    try:
        restaurant = repository.get_restaurant(restaurant_id)
    except NotFoundError:
        return _error_page(request, RESTAURANT_MISSING, 404)

    return templates.TemplateResponse(
        request,
        "post-review.html",
        {
            "current": restaurant,
            "title": f"{restaurant.title} Review",
            "recaptcha_site_key": verifier.site_key,
        },
    )


@router.post("/restaurants/{restaurant_id}/reviews/create")
def create_review(
    restaurant_id: str,
    request: Request,
    body: dict[str, Any] = Depends(read_body),
    repository: DirectoryRepository = Depends(get_repository),
    verifier: RecaptchaVerifier = Depends(get_verifier),
    config: AppConfig = Depends(get_app_config),
):
    try:
        submission = ReviewSubmission.model_validate(body)
    except ValidationError:
        return _error_page(request, INVALID_SUBMISSION, 400)
    remote_ip = request.client.host if request.client else None
    try:
        submit_review(
            repository,
            verifier,
            restaurant_id,
            submission,
            check_restaurant=config.check_review_restaurant,
            remote_ip=remote_ip,
        )
    except VerificationError as exc:
        logger.debug(
            "Rejected review for %s: %s (%s)",
            restaurant_id,
            exc.reason,
            ", ".join(exc.error_codes) or "no error codes",
        )
        return _error_page(request, RECAPTCHA_FAILED, 400)
    except NotFoundError:
        return _error_page(request, RESTAURANT_MISSING, 404)
    except PersistenceError:
        return _error_page(request, REVIEW_NOT_SAVED, 500)

    return RedirectResponse(url=f"/restaurants/{restaurant_id}/reviews", status_code=303)


# ── JSON routes ──────────────────────────────────────────────────────────


@router.get("/api/restaurants", response_model=list[Restaurant])
def api_list_restaurants(repository: DirectoryRepository = Depends(get_repository)):
    return repository.list_restaurants()


@router.post("/api/restaurants", response_model=Restaurant)
def api_create_restaurant(
    body: dict[str, Any] = Depends(read_body),
    repository: DirectoryRepository = Depends(get_repository),
):
    try:
        fields = RestaurantIn.model_validate(body)
    except ValidationError as exc:
        return JSONResponse(status_code=422, content={"error": str(exc)})
    return repository.create_restaurant(fields)


@router.get("/api/restaurants/{restaurant_id}", response_model=Restaurant)
def api_get_restaurant(
    restaurant_id: str,
    repository: DirectoryRepository = Depends(get_repository),
):
    try:
        return repository.get_restaurant(restaurant_id)
    except NotFoundError:
        return JSONResponse(status_code=404, content={"error": RESTAURANT_MISSING_API})


@router.delete("/api/restaurants/{restaurant_id}")
def api_delete_restaurant(
    restaurant_id: str,
    repository: DirectoryRepository = Depends(get_repository),
):
    try:
        repository.delete_restaurant(restaurant_id)
    except NotFoundError:
        return JSONResponse(status_code=404, content={"error": RESTAURANT_MISSING_API})
    return {"status": "success"}


# ── Application factory ──────────────────────────────────────────────────


def create_app(
    config: AppConfig = DEFAULT_APP_CONFIG,
    store: MongoStore | None = None,
    verifier: RecaptchaVerifier | None = None,
) -> FastAPI:
    """
    Build the application around an explicitly supplied store and verifier.

    The store is opened when the application starts and closed when it
    shuts down.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.config = config
        app.state.store = store if store is not None else MongoStore()
        app.state.verifier = verifier if verifier is not None else RecaptchaVerifier()
        app.state.store.open()
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(title="Restaurant Directory", version="1.0.0", lifespan=lifespan)

    @app.exception_handler(PersistenceError)
    async def persistence_error(request: Request, exc: PersistenceError):
        if request.url.path.startswith("/api/"):
            return JSONResponse(status_code=500, content={"error": str(exc)})
        return _error_page(request, STORE_UNAVAILABLE, 500)

    app.include_router(router)
    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")
    return app


app = create_app()
