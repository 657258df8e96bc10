from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

SITEVERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


@dataclass(frozen=True)
class RecaptchaConfig:
    secret_key: str = os.getenv("RECAPTCHA_SECRET_KEY", "")
    site_key: str = os.getenv("RECAPTCHA_SITE_KEY", "")
    verify_url: str = SITEVERIFY_URL
    timeout: float = float(os.getenv("RECAPTCHA_TIMEOUT") or 10.0)


DEFAULT_RECAPTCHA_CONFIG = RecaptchaConfig()
