"""
reCAPTCHA verification layer.

Responsibilities:
- Hold the site and secret keys for the verification service.
- POST response tokens to the siteverify endpoint with a bounded timeout.
- Turn transport errors, bad responses and denials into a failed result.
"""

from .client import FailureReason, RecaptchaVerifier, VerificationResult, siteverify, verify
from .config import DEFAULT_RECAPTCHA_CONFIG, RecaptchaConfig

__all__ = [
    "DEFAULT_RECAPTCHA_CONFIG",
    "FailureReason",
    "RecaptchaConfig",
    "RecaptchaVerifier",
    "VerificationResult",
    "siteverify",
    "verify",
]
