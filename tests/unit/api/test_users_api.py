"""
Name: User Endpoint Tests

Responsibilities:
  - Validate register -> verify -> login over HTTP (JWT + cookie)
  - Validate RFC7807 bodies (status, code, reason) for auth failures
  - Validate profile, invitation, password reset and account deletion routes
"""

import pytest

from albaranes import container

pytestmark = pytest.mark.unit

PASSWORD = "supersecret"


def test_register_returns_token_and_unverified_user(api):
    response = api.post(
        "/api/user/register", json={"email": "new@example.com", "password": PASSWORD}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["status"] is False
    assert "verification_code" not in body["user"]
    assert "access_token" in response.cookies


def test_register_rejects_guest_role_and_short_password(api):
    guest = api.post(
        "/api/user/register",
        json={"email": "g@example.com", "password": PASSWORD, "role": "invitado"},
    )
    short = api.post("/api/user/register", json={"email": "s@example.com", "password": "x"})

    assert guest.status_code == 422
    assert short.status_code == 422
    assert short.json()["detail"] == "Datos de entrada inválidos"
    assert short.headers["content-type"].startswith("application/problem+json")


def test_register_verified_email_conflicts(api, signup):
    signup("dup@example.com")

    response = api.post(
        "/api/user/register", json={"email": "dup@example.com", "password": PASSWORD}
    )

    body = response.json()
    assert response.status_code == 409
    assert body["code"] == "CONFLICT"
    assert body["reason"] == "EMAIL_ALREADY_REGISTERED_AND_VERIFIED"
    assert body["type"] == "about:blank/conflict"


def test_login_requires_verified_account(api):
    api.post("/api/user/register", json={"email": "late@example.com", "password": PASSWORD})

    response = api.post(
        "/api/user/login", json={"email": "late@example.com", "password": PASSWORD}
    )

    assert response.status_code == 401
    assert response.json()["reason"] == "USER_NOT_VALIDATED"


def test_login_after_verification(api, signup):
    signup("ok@example.com")

    response = api.post("/api/user/login", json={"email": "OK@example.com", "password": PASSWORD})
    wrong = api.post("/api/user/login", json={"email": "ok@example.com", "password": "nope-nope"})

    assert response.status_code == 200
    assert response.json()["user"]["status"] is True
    assert wrong.status_code == 401
    assert wrong.json()["reason"] == "INVALID_CREDENTIALS"


def test_wrong_verification_code(api):
    registered = api.post(
        "/api/user/register", json={"email": "v@example.com", "password": PASSWORD}
    )
    headers = {"Authorization": f"Bearer {registered.json()['access_token']}"}
    code = container.get_user_repository().get_user_by_email("v@example.com").verification_code
    wrong = "000000" if code != "000000" else "111111"

    response = api.put("/api/user/validation", json={"code": wrong}, headers=headers)
    malformed = api.put("/api/user/validation", json={"code": "12ab"}, headers=headers)

    assert response.status_code == 422
    assert response.json()["reason"] == "INVALID_VERIFICATION_CODE"
    assert malformed.status_code == 422


def test_me_requires_token(api):
    api.cookies.clear()

    response = api.get("/api/user/me")
    garbage = api.get("/api/user/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["reason"] == "NOT_TOKEN"
    assert garbage.status_code == 401
    assert garbage.json()["reason"] == "INVALID_TOKEN"


def test_cookie_authenticates(api, signup):
    signup("cookie@example.com")

    response = api.get("/api/user/me")

    assert response.status_code == 200
    assert response.json()["email"] == "cookie@example.com"


def test_personal_data_and_company(api, auth):
    personal = api.put(
        "/api/user/personal",
        json={"name": "Ana", "surnames": "Gil", "nif": "12345678Z"},
        headers=auth,
    )
    company = api.patch(
        "/api/user/company", json={"name": "Obras SL", "cif": "b1234"}, headers=auth
    )

    assert personal.status_code == 200
    assert personal.json()["nif"] == "12345678Z"
    assert company.status_code == 200
    assert company.json()["company"]["cif"] == "B1234"


def test_company_cif_conflict_between_accounts(api, signup):
    first = signup("first@example.com")
    second = signup("second@example.com")
    api.patch("/api/user/company", json={"name": "A", "cif": "B1"}, headers=first)

    response = api.patch("/api/user/company", json={"name": "B", "cif": "B1"}, headers=second)

    assert response.status_code == 409
    assert response.json()["reason"] == "COMPANY_CIF_ALREADY_EXISTS"


def test_logo_upload(api, auth):
    missing = api.patch("/api/user/logo", headers=auth)
    response = api.patch(
        "/api/user/logo",
        files={"logo": ("logo.png", b"\x89PNG data", "image/png")},
        headers=auth,
    )

    assert missing.status_code == 400
    assert missing.json()["reason"] == "LOGO_IMAGE_FILE_REQUIRED"
    assert response.status_code == 200
    assert response.json()["logo_url"].startswith("memory://objects/")


def test_soft_delete_deactivates_account(api, auth):
    response = api.delete("/api/user/me", headers=auth)
    after = api.get("/api/user/me", headers=auth)

    assert response.json() == {"deleted": True, "hard": False}
    assert after.status_code == 403
    assert after.json()["reason"] == "USER_ACCOUNT_DEACTIVATED"


def test_hard_delete_blocked_by_clients(api, auth):
    api.post("/api/client", json={"name": "Acme", "cif": "B1"}, headers=auth)

    response = api.delete("/api/user/me", params={"soft": "false"}, headers=auth)

    assert response.status_code == 409
    assert response.json()["reason"] == "USER_HAS_DEPENDENT_RECORDS"


def test_forgot_and_reset_password(api, signup):
    signup("reset@example.com")

    forgot = api.post("/api/user/forgot-password", json={"email": "reset@example.com"})
    unknown = api.post("/api/user/forgot-password", json={"email": "ghost@example.com"})
    token = container.get_user_repository().get_user_by_email("reset@example.com").reset_token
    reset = api.post(
        "/api/user/reset-password", json={"token": token, "password": "another-pass"}
    )
    login = api.post(
        "/api/user/login", json={"email": "reset@example.com", "password": "another-pass"}
    )

    assert forgot.json() == unknown.json()
    assert reset.status_code == 200
    assert login.status_code == 200


def test_reset_with_unknown_token(api):
    response = api.post(
        "/api/user/reset-password", json={"token": "c" * 40, "password": "another-pass"}
    )

    assert response.status_code == 400
    assert response.json()["reason"] == "INVALID_OR_EXPIRED_TOKEN"


def test_invite_and_accept(api, auth):
    invited = api.post("/api/user/invite", json={"email": "guest@example.com"}, headers=auth)
    token = container.get_user_repository().get_user_by_email(
        "guest@example.com"
    ).invitation_token
    accepted = api.post(
        "/api/user/accept-invitation",
        json={"token": token, "password": PASSWORD, "name": "Eva"},
    )

    assert invited.status_code == 201
    assert invited.json()["role"] == "invitado"
    assert accepted.status_code == 200
    assert accepted.json()["user"]["status"] is True
    assert accepted.json()["user"]["name"] == "Eva"
