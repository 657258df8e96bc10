from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import requests

from .config import DEFAULT_RECAPTCHA_CONFIG, RecaptchaConfig

logger = logging.getLogger(__name__)


class FailureReason(str, Enum):
    denied = "denied"
    transport = "transport"
    bad_response = "bad_response"
    missing_token = "missing_token"


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    reason: FailureReason | None = None
    error_codes: tuple[str, ...] = ()

    @classmethod
    def failed(cls, reason: FailureReason, error_codes: tuple[str, ...] = ()) -> VerificationResult:
        return cls(success=False, reason=reason, error_codes=error_codes)


def siteverify(
    token: str | None,
    secret_key: str,
    config: RecaptchaConfig = DEFAULT_RECAPTCHA_CONFIG,
    remote_ip: str | None = None,
) -> VerificationResult:
    """
    Ask the reCAPTCHA service whether `token` is a valid response.

    Never raises: timeouts, connection errors, non-2xx statuses and
    unparseable bodies all come back as a failed result.
    """
    if not token:
        return VerificationResult.failed(FailureReason.missing_token)

    payload = {"secret": secret_key, "response": token}
    if remote_ip:
        payload["remoteip"] = remote_ip

    try:
        response = requests.post(config.verify_url, data=payload, timeout=config.timeout)
        response.raise_for_status()
    except requests.RequestException:
        logger.warning("reCAPTCHA siteverify call failed", exc_info=True)
        return VerificationResult.failed(FailureReason.transport)

    try:
        body = response.json()
    except ValueError:
        logger.warning("reCAPTCHA siteverify returned a non-JSON body", exc_info=True)
        return VerificationResult.failed(FailureReason.bad_response)

    if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
        logger.warning("reCAPTCHA siteverify returned an unexpected body: %r", body)
        return VerificationResult.failed(FailureReason.bad_response)

    error_codes = tuple(str(code) for code in body.get("error-codes") or ())
    if not body["success"]:
        logger.warning("reCAPTCHA token denied: %s", ", ".join(error_codes) or "no error codes")
        return VerificationResult.failed(FailureReason.denied, error_codes)

    return VerificationResult(success=True, error_codes=error_codes)


def verify(
    token: str | None,
    secret_key: str,
    config: RecaptchaConfig = DEFAULT_RECAPTCHA_CONFIG,
) -> bool:
    return siteverify(token, secret_key, config=config).success


class RecaptchaVerifier:
    """Verifier bound to the process-wide secret key."""

    def __init__(self, config: RecaptchaConfig = DEFAULT_RECAPTCHA_CONFIG) -> None:
        self.config = config
        if not config.secret_key:
            logger.warning(
                "RECAPTCHA_SECRET_KEY not set - every review submission will fail verification"
            )

    @property
    def site_key(self) -> str:
        return self.config.site_key

    def check(self, token: str | None, remote_ip: str | None = None) -> VerificationResult:
        return siteverify(token, self.config.secret_key, config=self.config, remote_ip=remote_ip)
