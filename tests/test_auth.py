"""
Authentication client and session context tests
"""
import pytest

from hr_console.config import settings
from hr_console.services import auth as auth_module
from hr_console.services.auth import AuthClient, AuthEvent
from hr_console.services.session import SessionContext

TEST_EMAIL = "jane.doe@example.com"
TEST_PASSWORD = "secret123"


@pytest.fixture
def auth(db):
    client = AuthClient(db)
    assert client.sign_up(TEST_EMAIL, TEST_PASSWORD).ok
    return client


@pytest.fixture
def events(auth):
    received = []
    auth.subscribe(lambda event, session: received.append(event))
    return received


def test_sign_up_does_not_open_a_session(db):
    result = AuthClient(db).sign_up("New.User@Example.com", TEST_PASSWORD)

    assert result.ok
    assert result.session is None


def test_duplicate_sign_up(auth):
    result = auth.sign_up(TEST_EMAIL.upper(), TEST_PASSWORD)

    assert result.error.message == "User already registered"


def test_short_password(db):
    result = AuthClient(db).sign_up("short@example.com", "abc")

    assert not result.ok
    assert "at least 6 characters" in result.error.message


def test_sign_in_emits_signed_in(auth, events):
    result = auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD)

    assert result.session.user.email == TEST_EMAIL
    assert events == [AuthEvent.SIGNED_IN]


def test_wrong_password(auth, events):
    result = auth.sign_in_with_password(TEST_EMAIL, "wrong-password")

    assert result.error.message == "Invalid login credentials"
    assert result.session is None
    assert events == []


def test_missing_backend_key_is_reported(auth, monkeypatch):
    monkeypatch.setattr(settings, "secret_key", None)

    result = auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD)

    assert result.error.status == 503
    assert result.error.message == "Authentication backend is not configured"


def test_get_session_round_trip(auth):
    session = auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD).session

    result = auth.get_session(session.access_token)

    assert result.session.user.id == session.user.id
    assert auth.get_session(None).session is None
    assert auth.get_session("garbage").error.status == 401


def test_session_near_expiry_is_refreshed(auth, events, monkeypatch):
    session = auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD).session
    monkeypatch.setattr(settings, "refresh_window_minutes", settings.access_token_expire_minutes + 5)

    result = auth.get_session(session.access_token)

    assert result.session is not None
    assert events == [AuthEvent.SIGNED_IN, AuthEvent.TOKEN_REFRESHED]


def test_sign_out_emits_signed_out(auth, events):
    session = auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD).session

    auth.sign_out(session)

    assert events == [AuthEvent.SIGNED_IN, AuthEvent.SIGNED_OUT]


def test_unsubscribed_listener_is_not_called(auth):
    received = []
    subscription = auth.subscribe(lambda event, session: received.append(event))
    subscription.unsubscribe()

    auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD)

    assert received == []


def test_password_recovery_flow(auth, events, monkeypatch):
    sent = []
    monkeypatch.setattr(auth_module, "send_password_reset_email", lambda email, link: sent.append(link) or True)

    assert auth.reset_password_for_email(TEST_EMAIL, "http://testserver/auth/reset-password").ok
    assert len(sent) == 1
    assert sent[0].startswith("http://testserver/auth/reset-password?token=")
    token = sent[0].split("token=", 1)[1]

    assert auth.get_session(token).error is not None

    result = auth.update_password(token, "brand-new-pass")

    assert result.session.user.email == TEST_EMAIL
    assert events == [AuthEvent.PASSWORD_RECOVERY, AuthEvent.USER_UPDATED]
    assert auth.sign_in_with_password(TEST_EMAIL, "brand-new-pass").ok
    assert not auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD).ok


def test_reset_for_unknown_email_sends_nothing(auth, monkeypatch):
    sent = []
    monkeypatch.setattr(auth_module, "send_password_reset_email", lambda email, link: sent.append(link) or True)

    assert auth.reset_password_for_email("nobody@example.com", "http://testserver/reset").ok
    assert sent == []


def test_reset_reports_mail_failure(auth, monkeypatch):
    monkeypatch.setattr(auth_module, "send_password_reset_email", lambda email, link: False)

    result = auth.reset_password_for_email(TEST_EMAIL, "http://testserver/reset")

    assert result.error.status == 502


def test_access_token_cannot_reset_password(auth):
    session = auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD).session

    result = auth.update_password(session.access_token, "brand-new-pass")

    assert result.error.status == 401


def test_session_context_follows_events(auth):
    context = SessionContext(auth)
    assert context.loading
    assert context.username == "User"

    context.initialize(None)
    assert not context.loading
    assert not context.is_signed_in

    context.sign_in(TEST_EMAIL, TEST_PASSWORD)
    assert context.is_signed_in
    assert context.username == "jane.doe"

    context.sign_out()
    assert not context.is_signed_in
    assert context.session is None


def test_closed_context_stops_listening(auth):
    context = SessionContext(auth)
    context.initialize(None)
    context.close()

    auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD)

    assert not context.is_signed_in


def test_api_login_sets_cookie(client, auth):
    res = client.post("/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})

    assert res.status_code == 200
    assert res.json()["token_type"] == "bearer"
    assert "access_token" in res.cookies


def test_api_login_failure(client, auth):
    res = client.post("/auth/login", json={"email": TEST_EMAIL, "password": "nope-nope"})

    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid login credentials"


def test_api_me(auth_client):
    res = auth_client.get("/auth/me")

    assert res.status_code == 200
    assert res.json()["email"] == TEST_EMAIL
    assert res.json()["last_sign_in_at"] is not None


def test_api_me_requires_session(client):
    assert client.get("/auth/me").status_code == 401


def test_api_bearer_header(client, auth):
    token = client.post("/auth/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD}).json()["access_token"]
    client.cookies.clear()

    res = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 200


def test_api_logout_clears_cookie(auth_client):
    assert auth_client.post("/auth/logout").status_code == 200

    assert auth_client.get("/auth/me").status_code == 401


def test_api_reset_password_for_unknown_email(client):
    res = client.post("/auth/reset-password", json={"email": "ghost@example.com"})

    assert res.status_code == 200


def test_sign_up_rejects_passwords_beyond_bcrypt_limit(db):
    result = AuthClient(db).sign_up("long@example.com", "x" * 80)

    assert result.error.message == "Password should be at most 72 bytes"


def test_multibyte_password_limit_counts_bytes(db):
    assert not AuthClient(db).sign_up("long@example.com", "é" * 40).ok


def test_sign_in_with_overlong_password_fails_cleanly(auth):
    result = auth.sign_in_with_password(TEST_EMAIL, "x" * 80)

    assert result.error.message == "Invalid login credentials"


def test_update_password_rejects_overlong_password(auth, monkeypatch):
    sent = []
    monkeypatch.setattr(auth_module, "send_password_reset_email", lambda email, link: sent.append(link) or True)
    auth.reset_password_for_email(TEST_EMAIL, "http://testserver/reset")
    token = sent[0].split("token=", 1)[1]

    result = auth.update_password(token, "x" * 80)

    assert result.error.message == "Password should be at most 72 bytes"
    assert auth.sign_in_with_password(TEST_EMAIL, TEST_PASSWORD).ok


def test_api_overlong_password(client, auth):
    res = client.post("/auth/signup", json={"email": "long@example.com", "password": "x" * 80})
    assert res.status_code == 400

    res = client.post("/auth/login", json={"email": TEST_EMAIL, "password": "x" * 80})
    assert res.status_code == 401
