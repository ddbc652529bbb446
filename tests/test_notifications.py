"""
Tests for report rendering, SMTP delivery and the retrying notifier.
"""

import smtplib
from datetime import datetime

import pytest

from ip_radar.notifications import providers
from ip_radar.notifications.dispatcher import Notifier, RetryPolicy
from ip_radar.notifications.formatters import (
    SUBJECT,
    build_change_message,
    render_change_report,
)
from ip_radar.notifications.models import EmailMessage, NotificationSettings
from ip_radar.notifications.providers import SmtpTransport, to_mime

from conftest import RecordingTransport, v4, v6


class TestFormatters:
    """Test the HTML change report."""

    def test_report_lists_every_sighting(self):
        html = render_change_report(
            [v4("203.0.113.5"), v6("2001:db8::1", "wlan0")],
            generated_at=datetime(2025, 1, 15, 10, 30, 0),
        )

        assert "203.0.113.5" in html
        assert "2001:db8::1" in html
        assert "IPv4" in html and "IPv6" in html
        assert "Interface: eth0" in html
        assert "Interface: wlan0" in html
        assert 'class="ip-type ipv4"' in html
        assert "Detected at: 2025-01-15 10:30:00" in html

    def test_interface_name_is_escaped(self):
        html = render_change_report([v4("203.0.113.5", "<eth0>")])
        assert "&lt;eth0&gt;" in html

    def test_message_envelope(self, settings):
        message = build_change_message([v4("203.0.113.5")], settings)

        assert message.sender == "radar@example.com"
        assert message.recipient == "ops@example.com"
        assert message.subject == SUBJECT == "IP Address Change Detected"
        assert message.content_type.startswith("text/html")

    def test_mime_headers(self):
        mime = to_mime(EmailMessage("a@example.com", "b@example.com", SUBJECT, "<p>x</p>"))

        assert mime["Subject"] == SUBJECT
        assert mime["From"] == "a@example.com"
        assert mime["To"] == "b@example.com"
        assert mime.get_content_type() == "text/html"


class TestNotifier:
    """Test retry policy and failure containment."""

    def _notifier(self, transport, settings, sleeps):
        return Notifier(
            transport=transport,
            settings_provider=lambda: settings,
            sleep=sleeps.append,
        )

    def test_success_first_attempt(self, settings):
        transport = RecordingTransport()
        sleeps = []

        assert self._notifier(transport, settings, sleeps).notify([v4("203.0.113.5")])
        assert transport.attempts == 1
        assert sleeps == []

    def test_three_attempts_then_give_up(self, settings):
        transport = RecordingTransport(failures=10)
        sleeps = []

        result = self._notifier(transport, settings, sleeps).notify([v4("203.0.113.5")])

        assert result is False
        assert transport.attempts == 3
        assert sleeps == [2.0, 2.0]

    def test_stops_at_first_success(self, settings):
        transport = RecordingTransport(failures=1)
        sleeps = []

        assert self._notifier(transport, settings, sleeps).notify([v4("203.0.113.5")])
        assert transport.attempts == 2
        assert sleeps == [2.0]
        message, used = transport.sent[0]
        assert used == settings
        assert "203.0.113.5" in message.html_body

    def test_settings_failure_is_a_delivery_failure(self):
        def broken_settings():
            raise RuntimeError("settings unavailable")

        transport = RecordingTransport()
        sleeps = []
        notifier = Notifier(transport, broken_settings, sleep=sleeps.append)

        assert notifier.notify([v4("203.0.113.5")]) is False
        assert transport.attempts == 0
        assert len(sleeps) == 2

    def test_reads_settings_at_send_time(self, settings):
        current = {"value": settings}
        transport = RecordingTransport()
        notifier = Notifier(transport, lambda: current["value"], sleep=lambda s: None)

        current["value"] = settings.model_copy(update={"recipient": "new@example.com"})
        notifier.notify([v4("203.0.113.5")])

        assert transport.sent[0][0].recipient == "new@example.com"

    def test_empty_sightings_not_sent(self, settings):
        transport = RecordingTransport()

        assert self._notifier(transport, settings, []).notify([]) is False
        assert transport.attempts == 0

    def test_custom_policy(self, settings):
        transport = RecordingTransport(failures=10)
        sleeps = []
        notifier = Notifier(
            transport,
            lambda: settings,
            retry=RetryPolicy(max_attempts=5, delay_seconds=0.5),
            sleep=sleeps.append,
        )

        notifier.notify([v4("203.0.113.5")])

        assert transport.attempts == 5
        assert sleeps == [0.5] * 4


class FakeSMTP:
    """Stand-in for smtplib.SMTP / SMTP_SSL."""

    instances = []
    starttls_offered = True

    def __init__(self, host, port, timeout=None, context=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.context = context
        self.offers_starttls = FakeSMTP.starttls_offered
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append("quit")
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def has_extn(self, name):
        return name == "starttls" and self.offers_starttls

    def starttls(self, context=None):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        self.calls.append(("send", msg["To"]))


class TestSmtpTransport:
    """Test SMTP conversation without a network."""

    @pytest.fixture(autouse=True)
    def fake_smtp(self, monkeypatch):
        FakeSMTP.instances = []
        FakeSMTP.starttls_offered = True
        monkeypatch.setattr(providers.smtplib, "SMTP", FakeSMTP)
        monkeypatch.setattr(providers.smtplib, "SMTP_SSL", FakeSMTP)

    def _message(self):
        return EmailMessage("radar@example.com", "ops@example.com", SUBJECT, "<p>x</p>")

    def test_starttls_submission(self, settings):
        SmtpTransport(timeout=7.5).send(self._message(), settings)

        server = FakeSMTP.instances[0]
        assert (server.host, server.port, server.timeout) == ("smtp.example.com", 587, 7.5)
        assert server.calls == [
            "ehlo",
            "starttls",
            "ehlo",
            ("login", "radar@example.com", "app-key"),
            ("send", "ops@example.com"),
            "quit",
        ]

    def test_implicit_tls_on_465(self, settings):
        settings = settings.model_copy(update={"relay_port": "465"})

        SmtpTransport().send(self._message(), settings)

        server = FakeSMTP.instances[0]
        assert server.context is not None
        assert "starttls" not in server.calls
        assert ("login", "radar@example.com", "app-key") in server.calls

    def test_remote_relay_without_starttls_refused(self, settings):
        FakeSMTP.starttls_offered = False

        with pytest.raises(smtplib.SMTPNotSupportedError):
            SmtpTransport().send(self._message(), settings)

        calls = FakeSMTP.instances[0].calls
        assert not any(isinstance(c, tuple) and c[0] == "login" for c in calls)
        assert not any(isinstance(c, tuple) and c[0] == "send" for c in calls)

    def test_local_relay_without_starttls_allowed(self, settings):
        FakeSMTP.starttls_offered = False
        settings = settings.model_copy(update={"relay_host": "localhost", "relay_port": "25"})

        SmtpTransport().send(self._message(), settings)

        assert ("login", "radar@example.com", "app-key") in FakeSMTP.instances[0].calls

    def test_invalid_port_raises(self, settings):
        settings = settings.model_copy(update={"relay_port": "Modify it"})

        with pytest.raises(ValueError):
            SmtpTransport().send(self._message(), settings)
        assert FakeSMTP.instances == []


class TestNotificationSettings:
    """Test settings model."""

    def test_is_complete(self, settings):
        assert settings.is_complete()
        assert not NotificationSettings().is_complete()
