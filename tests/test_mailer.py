"""Tests for notification mail delivery."""

import smtplib

import pytest

from intradesk.config import Settings
from intradesk.main import app
from intradesk.services.mailer import Mailer, MailNotConfigured, get_mailer


class FakeSMTP:
    instances: list["FakeSMTP"] = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.messages = []
        self.started_tls = False
        self.logged_in = None
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, username, password):
        self.logged_in = (username, password)

    def send_message(self, msg):
        if FakeSMTP.fail_with:
            raise FakeSMTP.fail_with
        self.messages.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def configured_mailer():
    return Mailer(
        Settings(
            smtp_host="smtp.test",
            smtp_port=2525,
            smtp_username="bot",
            smtp_password="secret",
            mail_from="desk@example.com",
        )
    )


async def test_send_builds_message(fake_smtp):
    """Subject is prefixed; TLS and login happen before sending."""
    await configured_mailer().send(["a@example.com", "b@example.com"], "Hello", "Body text")

    smtp = fake_smtp.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.test", 2525)
    assert smtp.started_tls
    assert smtp.logged_in == ("bot", "secret")
    msg = smtp.messages[0]
    assert msg["Subject"] == "[Intradesk] Hello"
    assert msg["To"] == "a@example.com, b@example.com"
    assert msg["From"] == "desk@example.com"


async def test_send_unconfigured_raises():
    """Without an SMTP host, send refuses."""
    with pytest.raises(MailNotConfigured):
        await Mailer(Settings(smtp_host=None)).send(["a@example.com"], "Hi", "x")


async def test_notify_reports_failure(fake_smtp):
    """SMTP errors become a warning instead of an exception."""
    fake_smtp.fail_with = smtplib.SMTPRecipientsRefused({})
    result = await configured_mailer().notify(["a@example.com"], "Hi", "x")
    assert result.sent is False
    assert result.warning == "Notification e-mail could not be delivered"


async def test_notify_without_recipients(fake_smtp):
    """Empty recipient lists skip sending entirely."""
    result = await configured_mailer().notify(["", ""], "Hi", "x")
    assert result.sent is False
    assert result.warning is None
    assert fake_smtp.instances == []


async def test_notify_success(fake_smtp):
    """A delivered mail reports sent."""
    result = await configured_mailer().notify(["a@example.com"], "Hi", "x")
    assert result.sent is True


async def test_email_endpoint_unconfigured(client, mailer):
    """The ad-hoc mail endpoint surfaces delivery problems as 502."""
    mailer.config = Settings(smtp_host=None)
    response = await client.post(
        "/v1/notifications/email",
        json={"to": ["a@example.com"], "subject": "Hi", "body": "x"},
    )
    assert response.status_code == 502
    assert response.json()["code"] == "DELIVERY_FAILED"


async def test_line_breaks_in_subject_are_collapsed(fake_smtp):
    """A multi-line subject cannot add header lines."""
    await configured_mailer().send(["a@example.com"], "Room A\nBcc: x@evil.test", "x")

    msg = fake_smtp.instances[0].messages[0]
    assert msg["Subject"] == "[Intradesk] Room A Bcc: x@evil.test"
    assert msg["Bcc"] is None


async def test_notify_bad_recipient_header_is_a_warning(fake_smtp):
    """A recipient with a line break is reported, not raised."""
    result = await configured_mailer().notify(["a@example.com\nBcc: x@evil.test"], "Hi", "x")
    assert result.sent is False
    assert result.warning == "Notification e-mail could not be built"
    assert fake_smtp.instances == []


async def test_multiline_title_application_is_stored_and_mailed(client, fake_smtp):
    """Submitting with a multi-line title still answers 201 and sends the mail."""
    app.dependency_overrides[get_mailer] = configured_mailer
    await client.post("/v1/settings", json={"reservation_emails": ["desk@example.com"]})
    response = await client.post(
        "/v1/applications",
        json={
            "application_type": "facility_reservation",
            "applicant_name": "Sato",
            "title": "Room A\nBcc: x@evil.test",
            "details": {
                "applicant": "Sato",
                "usage_date": "2025-10-20",
                "facility": "Room A",
                "start_time": "10:00",
                "end_time": "11:00",
                "purpose": "Client meeting",
            },
        },
    )
    assert response.status_code == 201
    assert response.json()["notification_sent"] is True
    msg = fake_smtp.instances[0].messages[0]
    assert msg["Bcc"] is None
    assert len((await client.get("/v1/applications")).json()) == 1


async def test_email_endpoint_bad_recipient(client, fake_smtp):
    """A recipient with a line break is a validation error."""
    app.dependency_overrides[get_mailer] = configured_mailer
    response = await client.post(
        "/v1/notifications/email",
        json={"to": ["a@example.com\nBcc: x@evil.test"], "subject": "Hi", "body": "x"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"
    assert fake_smtp.instances == []
