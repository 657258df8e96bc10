from __future__ import annotations

from unittest.mock import MagicMock, patch

import requests

from restaurant_directory.recaptcha import (
    FailureReason,
    RecaptchaConfig,
    RecaptchaVerifier,
    siteverify,
    verify,
)

CONFIG = RecaptchaConfig(
    secret_key="s3cret",
    site_key="site",
    verify_url="https://recaptcha.test/siteverify",
    timeout=2.5,
)


def _mock_response(body=None, status_error: Exception | None = None) -> MagicMock:
    response = MagicMock()
    response.json.return_value = body
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_success(mock_post):
    mock_post.return_value = _mock_response({"success": True, "hostname": "localhost"})

    assert verify("token", "s3cret", config=CONFIG) is True
    mock_post.assert_called_once_with(
        "https://recaptcha.test/siteverify",
        data={"secret": "s3cret", "response": "token"},
        timeout=2.5,
    )


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_denied(mock_post):
    mock_post.return_value = _mock_response(
        {"success": False, "error-codes": ["timeout-or-duplicate"]}
    )

    result = siteverify("token", "s3cret", config=CONFIG)

    assert result.success is False
    assert result.reason is FailureReason.denied
    assert result.error_codes == ("timeout-or-duplicate",)


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_timeout(mock_post):
    mock_post.side_effect = requests.Timeout("read timed out")

    result = siteverify("token", "s3cret", config=CONFIG)

    assert result.success is False
    assert result.reason is FailureReason.transport


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_non_2xx(mock_post):
    mock_post.return_value = _mock_response(status_error=requests.HTTPError("503 Server Error"))

    assert verify("token", "s3cret", config=CONFIG) is False


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_bad_json(mock_post):
    response = _mock_response()
    response.json.side_effect = ValueError("Expecting value")
    mock_post.return_value = response

    result = siteverify("token", "s3cret", config=CONFIG)

    assert result.success is False
    assert result.reason is FailureReason.bad_response


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_body_without_success_field(mock_post):
    mock_post.return_value = _mock_response({"hostname": "localhost"})

    result = siteverify("token", "s3cret", config=CONFIG)

    assert result.reason is FailureReason.bad_response


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_non_boolean_success(mock_post):
    mock_post.return_value = _mock_response({"success": "true"})

    assert verify("token", "s3cret", config=CONFIG) is False


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verify_empty_token(mock_post):
    result = siteverify("", "s3cret", config=CONFIG)

    assert result.reason is FailureReason.missing_token
    mock_post.assert_not_called()


@patch("restaurant_directory.recaptcha.client.requests.post")
def test_verifier_uses_configured_secret_and_remote_ip(mock_post):
    mock_post.return_value = _mock_response({"success": True})
    verifier = RecaptchaVerifier(CONFIG)

    assert verifier.check("token", remote_ip="203.0.113.9").success
    assert verifier.site_key == "site"
    assert mock_post.call_args.kwargs["data"] == {
        "secret": "s3cret",
        "response": "token",
        "remoteip": "203.0.113.9",
    }
