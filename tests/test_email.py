from unittest.mock import MagicMock, patch

import pytest
import requests

from app.platform.config import settings
from app.platform.services import email as email_service
from app.platform.services.email import EmailDeliveryError, send_email


@pytest.fixture
def relay_configured(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_RELAY_URL", "https://relay.dvand.in/send")
    monkeypatch.setattr(settings, "EMAIL_RELAY_API_KEY", "relay-key")


def test_relay_used_when_configured(relay_configured):
    response = MagicMock()
    response.json.return_value = {"message": "queued"}

    with patch("app.platform.services.email.requests.post", return_value=response) as mock_post:
        with patch("app.platform.services.email.send_email_direct_smtp") as mock_smtp:
            send_email("team@dvand.in", "New signup", "<p>hi</p>")

    mock_post.assert_called_once()
    assert mock_post.call_args.kwargs["json"]["to_email"] == "team@dvand.in"
    assert mock_post.call_args.kwargs["headers"]["X-API-Key"] == "relay-key"
    mock_smtp.assert_not_called()


def test_relay_failure_falls_back_to_smtp(relay_configured):
    with patch(
        "app.platform.services.email.requests.post",
        side_effect=requests.exceptions.ConnectionError("relay down"),
    ):
        with patch("app.platform.services.email.send_email_direct_smtp") as mock_smtp:
            send_email("team@dvand.in", "New signup", "<p>hi</p>")

    mock_smtp.assert_called_once_with("team@dvand.in", "New signup", "<p>hi</p>")


def test_smtp_used_without_relay(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_RELAY_URL", "")
    monkeypatch.setattr(settings, "MAIL_PORT", 587)
    smtp = MagicMock()

    with patch("app.platform.services.email.smtplib.SMTP") as mock_smtp_cls:
        mock_smtp_cls.return_value.__enter__.return_value = smtp
        send_email("team@dvand.in", "New signup", "<p>hi</p>")

    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with(settings.MAIL_USERNAME, settings.MAIL_PASSWORD)
    smtp.sendmail.assert_called_once()


def test_smtp_failure_is_raised(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_RELAY_URL", "")

    with patch("app.platform.services.email.smtplib.SMTP", side_effect=OSError("connection refused")):
        with pytest.raises(EmailDeliveryError):
            email_service.send_email_direct_smtp("team@dvand.in", "New signup", "<p>hi</p>")
