import pytest

from portfolio.auth import issue_token, validate_token
from portfolio.errors import Unauthorized

from .conftest import ADMIN_PASSWORD, ADMIN_USERNAME, make_settings


def test_login_then_me(client):
    res = client.post("/api/admin/login", json={"username": "awsam", "password": "1601"})
    assert res.status_code == 200
    body = res.json()
    assert body["token"]
    assert body["user"]["username"] == "awsam"
    assert body["user"]["role"] == "admin"
    assert body["user"]["last_login"] is not None
    assert "password_hash" not in body["user"]

    me = client.get("/api/admin/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json() == {"ok": True, "user": {"id": body["user"]["id"], "username": "awsam", "role": "admin"}}


@pytest.mark.parametrize(
    "username,password",
    [(ADMIN_USERNAME, "wrong"), ("nobody", ADMIN_PASSWORD)],
)
def test_login_rejects_bad_credentials(client, username, password):
    res = client.post("/api/admin/login", json={"username": username, "password": password})
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials"}


def test_login_requires_both_fields(client):
    res = client.post("/api/admin/login", json={"username": "  ", "password": ""})
    assert res.status_code == 400

    res = client.post("/api/admin/login", json={"username": "awsam"})
    assert res.status_code == 400
    assert "message" in res.json()


def test_no_admin_seeded_without_password(make_client):
    c = make_client(ADMIN_PASSWORD=None)
    res = c.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert res.status_code == 401


def test_token_round_trip(settings):
    token = issue_token(7, "bisan", "admin", settings)
    identity = validate_token(token, settings)
    assert identity.subject_id == 7
    assert identity.username == "bisan"
    assert identity.role == "admin"
    assert identity.expires_at > identity.issued_at


def test_expired_token_rejected(client, settings):
    token = issue_token(1, ADMIN_USERNAME, "admin", settings, lifetime_seconds=-60)
    with pytest.raises(Unauthorized):
        validate_token(token, settings)

    res = client.get("/api/admin/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"


def test_token_from_other_secret_rejected(client):
    other = make_settings(SECRET="another-secret-0123456789abcdef0123456789")
    token = issue_token(1, ADMIN_USERNAME, "admin", other)
    res = client.get("/api/admin/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json() == {"message": "Not authenticated"}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Basic YXdzYW06MTYwMQ=="},
    ],
)
def test_admin_routes_reject_bad_tokens_without_mutation(client, headers):
    assert client.get("/api/admin/me", headers=headers).status_code == 401
    assert client.get("/api/admin/projects", headers=headers).status_code == 401
    assert client.post("/api/admin/projects", json={"title": "X"}, headers=headers).status_code == 401
    assert client.post("/api/admin/blog", json={"title": "T", "html": "<p>x</p>"}, headers=headers).status_code == 401
    assert client.post("/api/admin/resume", json={"title": "R"}, headers=headers).status_code == 401
    assert client.get("/api/admin/contact", headers=headers).status_code == 401
    assert client.delete("/api/admin/projects/1", headers=headers).status_code == 401

    broken = {**headers, "Content-Type": "application/json"}
    assert client.post("/api/admin/projects", content=b"{not json", headers=broken).status_code == 401
    assert client.put("/api/admin/blog/1", content=b"{not json", headers=broken).status_code == 401
    assert client.patch("/api/admin/contact/1/review", content=b"[", headers=broken).status_code == 401

    assert client.get("/api/projects").json() == []
    assert client.get("/api/resume").json() == []


def test_malformed_body_with_valid_token_is_a_validation_error(client, admin_headers):
    res = client.post(
        "/api/admin/projects",
        content=b"{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert client.get("/api/projects").json() == []


def test_login_body_errors_are_not_auth_errors(client):
    res = client.post("/api/admin/login", content=b"{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
