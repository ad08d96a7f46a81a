from datetime import timedelta

from jose import jwt

from conftest import PASSWORD, _email, _headers, _login, _register
from jobsolution.config.config import settings
from jobsolution.config.errors import ErrorMessages
from jobsolution.services import auth_service
from jobsolution.models.user_model import RefreshToken, User
from jobsolution.utils.time_util import utcnow


def test_register_returns_profile_and_tokens(client):
    email = _email()
    resp = _register(client, email=email, first_name="Ivan", last_name="Petrov", phone="79991234567")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["user"]["email"] == email
    assert body["user"]["role"] == "user"
    assert body["user"]["phone"] == "79991234567"
    assert body["tokens"]["access_token"]
    assert body["tokens"]["refresh_token"]
    assert body["tokens"]["token_type"] == "bearer"
    assert "password_hash" not in body["user"]


def test_register_twice_conflicts_and_keeps_one_row(client, db):
    email = _email()
    assert _register(client, email=email).status_code == 201

    resp = _register(client, email=email)
    assert resp.status_code == 409, resp.text
    assert db.query(User).filter(User.email == email).count() == 1


def test_register_password_mismatch(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": _email(), "password": PASSWORD, "password_confirm": "Different123"},
    )
    assert resp.status_code == 400


def test_register_rejects_short_password_and_bad_phone(client):
    assert _register(client, password="short").status_code == 400
    assert _register(client, phone="12345").status_code == 400
    assert _register(client, email="not-an-email").status_code == 400


def test_login_and_wrong_password(client):
    email = _email()
    _register(client, email=email)

    body = _login(client, email)
    assert body["user"]["email"] == email

    resp = client.post("/api/auth/login", json={"email": email, "password": "WrongPass123"})
    assert resp.status_code == 401


def test_access_token_claims(client):
    body = _register(client).json()
    claims = jwt.decode(body["tokens"]["access_token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert claims["sub"] == str(body["user"]["id"])
    assert claims["email"] == body["user"]["email"]
    assert claims["role"] == "user"
    assert {"exp", "iat", "nbf"} <= set(claims)


def test_protected_route_requires_valid_token(client):
    assert client.get("/api/users/me").status_code == 401
    resp = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_refresh_token_is_single_use(client):
    tokens = _register(client).json()["tokens"]

    resp = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200, resp.text
    rotated = resp.json()
    assert rotated["refresh_token"] != tokens["refresh_token"]
    assert client.get("/api/users/me", headers=_headers(rotated)).status_code == 200

    reuse = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert reuse.status_code == 401

    again = client.post("/api/auth/refresh", json={"refresh_token": rotated["refresh_token"]})
    assert again.status_code == 200


def test_expired_refresh_token_is_rejected_and_removed(client, db):
    tokens = _register(client).json()["tokens"]
    stored = db.query(RefreshToken).filter(RefreshToken.token == tokens["refresh_token"]).one()
    stored.expires_at = utcnow() - timedelta(minutes=1)
    db.commit()

    resp = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 401
    db.expire_all()
    assert db.query(RefreshToken).filter(RefreshToken.token == tokens["refresh_token"]).count() == 0


def test_logout_revokes_refresh_token(client):
    tokens = _register(client).json()["tokens"]

    resp = client.post("/api/auth/logout", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200

    resp = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 401


def test_forgot_password_unknown_email(client):
    resp = client.post("/api/auth/forgot-password", json={"email": _email("ghost")})
    assert resp.status_code == 404


def test_password_reset_flow(client):
    email = _email()
    old_tokens = _register(client, email=email).json()["tokens"]

    resp = client.post("/api/auth/forgot-password", json={"email": email})
    assert resp.status_code == 200, resp.text
    reset_token = resp.json()["reset_token"]
    assert reset_token

    new_password = "NewSecret456!"
    resp = client.post(
        "/api/auth/reset-password",
        json={"token": reset_token, "password": new_password, "password_confirm": new_password},
    )
    assert resp.status_code == 200, resp.text

    _login(client, email, new_password)
    bad = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert bad.status_code == 401

    # resetting revokes existing sessions and consumes the reset token
    resp = client.post("/api/auth/refresh", json={"refresh_token": old_tokens["refresh_token"]})
    assert resp.status_code == 401
    resp = client.post(
        "/api/auth/reset-password",
        json={"token": reset_token, "password": new_password, "password_confirm": new_password},
    )
    assert resp.status_code == 400


def test_auth_routes_available_under_v1_prefix(client):
    email = _email()
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": PASSWORD, "password_confirm": PASSWORD},
    )
    assert resp.status_code == 201, resp.text
    assert client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD}).status_code == 200


def test_register_conflict_detected_by_database(client, db, monkeypatch):
    email = _email()
    assert _register(client, email=email).status_code == 201

    # another request registered the address after the lookup ran
    monkeypatch.setattr(auth_service, "get_user_by_email", lambda db, email: None)
    resp = _register(client, email=email)
    assert resp.status_code == 409, resp.text
    assert resp.json()["detail"] == ErrorMessages.EMAIL_ALREADY_EXISTS
    assert db.query(User).filter(User.email == email).count() == 1
