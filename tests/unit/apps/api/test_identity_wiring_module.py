import pytest

from apps.api.wiring.modules.identity import (
    IdentityRuntimeSettings,
    build_identity_api_module,
)
from stocktracker.contexts.identity.application.ports.credential_cipher import (
    ConfigurationError,
)

_ENCRYPTION_KEY = "42" * 32


def test_identity_wiring_fail_fast_in_prod_requires_jwt_secret() -> None:
    """
    Verify prod default fail-fast rejects startup when `JWT_SECRET` is missing.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Prod environment defaults fail-fast to enabled when override is absent.
    Raises:
        AssertionError: If wiring does not fail on missing JWT secret in prod.
    Side Effects:
        None.
    """
    environ = {
        "STOCKTRACKER_ENV": "prod",
        "ENCRYPTION_KEY": _ENCRYPTION_KEY,
    }

    with pytest.raises(ValueError, match="JWT_SECRET"):
        build_identity_api_module(environ=environ)


def test_identity_wiring_fail_fast_in_prod_requires_encryption_key() -> None:
    environ = {
        "STOCKTRACKER_ENV": "prod",
        "JWT_SECRET": "prod-jwt-secret",
    }

    with pytest.raises(ValueError, match="ENCRYPTION_KEY"):
        build_identity_api_module(environ=environ)


def test_identity_wiring_fail_fast_rejects_malformed_encryption_key() -> None:
    """
    Verify fail-fast parses the key at startup instead of at first cipher call.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Malformed key surfaces as ConfigurationError.
    Raises:
        AssertionError: If malformed key passes startup.
    Side Effects:
        None.
    """
    environ = {
        "STOCKTRACKER_ENV": "dev",
        "IDENTITY_FAIL_FAST": "true",
        "JWT_SECRET": "dev-jwt-secret",
        "ENCRYPTION_KEY": "hunter2",
    }

    with pytest.raises(ConfigurationError, match="64 hex characters"):
        build_identity_api_module(environ=environ)


def test_identity_wiring_dev_defaults_allow_missing_secrets() -> None:
    module = build_identity_api_module(environ={})

    paths = {getattr(route, "path", "") for route in module.router.routes}
    assert "/api/auth/register" in paths
    assert "/api/webull/credentials" in paths
    assert "/api/webull/test-auth" in paths


def test_identity_wiring_prod_with_secrets_and_fail_fast_override_off() -> None:
    module = build_identity_api_module(
        environ={
            "STOCKTRACKER_ENV": "prod",
            "IDENTITY_FAIL_FAST": "off",
        }
    )

    assert module.current_user_dependency is not None


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({"STOCKTRACKER_ENV": "staging"}, "STOCKTRACKER_ENV"),
        ({"IDENTITY_FAIL_FAST": "maybe"}, "IDENTITY_FAIL_FAST"),
        ({"JWT_TTL_DAYS": "0"}, "JWT_TTL_DAYS"),
        ({"JWT_TTL_DAYS": "seven"}, "JWT_TTL_DAYS"),
        ({"IDENTITY_BCRYPT_ROUNDS": "40"}, "bcrypt_rounds"),
    ],
)
def test_identity_wiring_rejects_invalid_settings(environ: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        build_identity_api_module(environ=environ)


def test_identity_runtime_settings_hide_secrets_from_repr() -> None:
    settings = IdentityRuntimeSettings(
        env_name="dev",
        fail_fast=False,
        jwt_ttl_days=7,
        jwt_secret="super-secret-jwt",
        postgres_dsn="postgresql://user:pw@localhost/db",
        bcrypt_rounds=10,
    )

    assert "super-secret-jwt" not in repr(settings)
    assert "pw@localhost" not in repr(settings)
