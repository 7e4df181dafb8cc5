"""
Password reset mail delivery tests
"""
import smtplib

import pytest

from hr_console.config import settings
from hr_console.services import mailer


class FailingSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.timeout = timeout
        self.closed = False
        FailingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def starttls(self):
        pass

    def login(self, username, password):
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")


@pytest.fixture
def smtp_credentials(monkeypatch):
    monkeypatch.setattr(settings, "smtp_username", "mailer")
    monkeypatch.setattr(settings, "smtp_password", "secret")


def test_blank_credentials_simulate_delivery(monkeypatch, capsys):
    monkeypatch.setattr(settings, "smtp_username", "")

    assert mailer.send_email("jane@example.com", "Hello", "<p>Hi</p>")
    assert "SIMULATED EMAIL TO: jane@example.com" in capsys.readouterr().out


def test_smtp_failure_closes_connection(smtp_credentials, monkeypatch):
    FailingSMTP.instances = []
    monkeypatch.setattr(mailer.smtplib, "SMTP", FailingSMTP)

    assert not mailer.send_password_reset_email("jane@example.com", "http://testserver/reset?token=t")

    connection = FailingSMTP.instances[0]
    assert connection.closed
    assert connection.timeout == 30
