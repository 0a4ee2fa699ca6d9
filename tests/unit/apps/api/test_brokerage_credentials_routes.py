from __future__ import annotations

from fastapi.testclient import TestClient

from apps.api.main.app import create_app

_ENCRYPTION_KEY = "7e" * 32


def _build_client(*, environ_overrides: dict[str, str] | None = None) -> TestClient:
    environ = {
        "STOCKTRACKER_ENV": "test",
        "JWT_SECRET": "credentials-routes-secret",
        "IDENTITY_BCRYPT_ROUNDS": "4",
        "ENCRYPTION_KEY": _ENCRYPTION_KEY,
    }
    environ.update(environ_overrides or {})
    return TestClient(create_app(environ=environ))


def _auth_headers(client: TestClient, *, email: str = "owner@example.com") -> dict[str, str]:
    response = client.post(
        "/api/auth/register",
        json={"email": email, "username": email.split("@")[0], "password": "secret1"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_credentials_routes_require_authentication() -> None:
    client = _build_client()

    assert client.get("/api/webull/credentials").status_code == 401
    assert client.post("/api/webull/credentials", json={}).status_code == 401
    assert client.delete("/api/webull/credentials").status_code == 401
    assert client.post("/api/webull/test-auth").status_code == 401


def test_credentials_lifecycle_store_view_test_delete() -> None:
    """
    Verify full credential lifecycle without the password ever leaving the server.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        `test-auth` succeeds when the stored token decrypts.
    Raises:
        AssertionError: If any step violates the response contract.
    Side Effects:
        None.
    """
    client = _build_client()
    headers = _auth_headers(client)

    missing = client.get("/api/webull/credentials", headers=headers)
    stored = client.post(
        "/api/webull/credentials",
        headers=headers,
        json={
            "webull_email_or_phone": "trader@webull.example",
            "webull_password": "brokerage-pass",
            "mfa_enabled": True,
        },
    )
    fetched = client.get("/api/webull/credentials", headers=headers)
    tested = client.post("/api/webull/test-auth", headers=headers)
    after_test = client.get("/api/webull/credentials", headers=headers)
    deleted = client.delete("/api/webull/credentials", headers=headers)
    deleted_again = client.delete("/api/webull/credentials", headers=headers)

    assert missing.status_code == 404
    assert missing.json()["detail"] == {
        "error": "brokerage_credential_not_found",
        "message": "No Webull credentials found",
    }

    assert stored.status_code == 200
    assert stored.json()["message"] == "Webull credentials stored successfully"
    credential = stored.json()["credential"]
    assert credential["webull_email_or_phone"] == "trader@webull.example"
    assert credential["mfa_enabled"] is True
    assert credential["last_authenticated"] is None
    assert "brokerage-pass" not in stored.text

    assert fetched.json()["credential"]["id"] == credential["id"]
    assert "brokerage-pass" not in fetched.text

    assert tested.status_code == 200
    assert tested.json()["message"] == "Webull authentication successful"
    assert tested.json()["last_authenticated"] is not None
    assert after_test.json()["credential"]["last_authenticated"] is not None

    assert deleted.json() == {"message": "Webull credentials deleted successfully"}
    assert deleted_again.status_code == 404
    assert deleted_again.json()["detail"]["message"] == "No credentials found to delete"


def test_credentials_are_scoped_to_current_user() -> None:
    client = _build_client()
    owner = _auth_headers(client, email="owner@example.com")
    other = _auth_headers(client, email="other@example.com")
    client.post(
        "/api/webull/credentials",
        headers=owner,
        json={"webull_email_or_phone": "owner-login", "webull_password": "owner-pass"},
    )

    assert client.get("/api/webull/credentials", headers=other).status_code == 404
    assert client.post("/api/webull/test-auth", headers=other).status_code == 404


def test_store_credentials_validates_fields_without_echoing_password() -> None:
    client = _build_client()
    headers = _auth_headers(client)

    empty_login = client.post(
        "/api/webull/credentials",
        headers=headers,
        json={"webull_email_or_phone": "  ", "webull_password": "leaky-secret"},
    )
    missing_login = client.post(
        "/api/webull/credentials",
        headers=headers,
        json={"webull_password": "leaky-secret"},
    )

    assert empty_login.status_code == 422
    assert empty_login.json()["detail"]["message"] == "Webull email or phone is required"
    assert missing_login.status_code == 422
    assert missing_login.json()["error"]["code"] == "validation_error"
    assert "leaky-secret" not in empty_login.text
    assert "leaky-secret" not in missing_login.text


def test_store_credentials_without_encryption_key_returns_opaque_error() -> None:
    client = _build_client(environ_overrides={"ENCRYPTION_KEY": ""})
    headers = _auth_headers(client)

    response = client.post(
        "/api/webull/credentials",
        headers=headers,
        json={"webull_email_or_phone": "login", "webull_password": "unstored-secret"},
    )

    assert response.status_code == 500
    assert response.json()["detail"] == {
        "error": "credential_unavailable",
        "message": "Stored credentials could not be processed",
    }
    assert "ENCRYPTION_KEY" not in response.text
    assert client.get("/api/webull/credentials", headers=headers).status_code == 404


def test_store_credentials_accepts_web_client_camel_case_body() -> None:
    client = _build_client()
    headers = _auth_headers(client)

    stored = client.post(
        "/api/webull/credentials",
        headers=headers,
        json={
            "webullEmailOrPhone": "me@webull.com",
            "webullPassword": "pw",
            "mfaEnabled": True,
        },
    )
    tested = client.post("/api/webull/test-auth", headers=headers)
    restored = client.post(
        "/api/webull/credentials",
        headers=headers,
        json={"webullEmailOrPhone": "me@webull.com", "webullPassword": "rotated-pw"},
    )

    assert stored.status_code == 200
    assert stored.json()["credential"]["webull_email_or_phone"] == "me@webull.com"
    assert stored.json()["credential"]["mfa_enabled"] is True
    assert "last_authenticated_at" not in stored.json()["credential"]
    assert restored.status_code == 200
    assert restored.json()["credential"]["mfa_enabled"] is False
    assert restored.json()["credential"]["last_authenticated"] == tested.json()[
        "last_authenticated"
    ]
