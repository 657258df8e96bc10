from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request

from .config import AppConfig
from .recaptcha import RecaptchaVerifier
from .store import DirectoryRepository


def get_repository(request: Request) -> DirectoryRepository:
    """Repository over the store opened by the application lifespan."""
    return DirectoryRepository(request.app.state.store.database, request.app.state.store.config)


def get_verifier(request: Request) -> RecaptchaVerifier:
    return request.app.state.verifier


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


async def read_body(request: Request) -> dict[str, Any]:
    """
    Request body as a dict, from either a JSON or a form-encoded payload.

    Raises 400 when a JSON body cannot be parsed into an object.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed JSON body")
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="JSON body must be an object")
        return body

    form = await request.form()
    # file parts are not part of any record
    return {key: value for key, value in form.items() if isinstance(value, str)}
