"""
Composition helpers for identity API module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from fastapi import APIRouter

from apps.api.routes import build_identity_router as build_identity_api_router
from stocktracker.contexts.identity.adapters.inbound.api.deps import RequireCurrentUserDependency
from stocktracker.contexts.identity.adapters.outbound import (
    AesGcmCredentialCipher,
    BcryptPasswordHasher,
    EnvironmentCredentialKeySource,
    Hs256JwtCodec,
    InMemoryIdentityBrokerageCredentialsRepository,
    InMemoryIdentityUserRepository,
    JwtBearerCurrentUser,
    PostgresIdentityBrokerageCredentialsRepository,
    PostgresIdentityUserRepository,
    PsycopgIdentityPostgresGateway,
    SystemIdentityClock,
)
from stocktracker.contexts.identity.adapters.outbound.security.credential_cipher import (
    ENCRYPTION_KEY_ENV,
)
from stocktracker.contexts.identity.application import (
    BrokerageCredentialsRepository,
    UserRepository,
)
from stocktracker.contexts.identity.application.use_cases import (
    AccessTokenIssuer,
    DeleteBrokerageCredentialUseCase,
    GetBrokerageCredentialUseCase,
    GetDecryptedBrokerageCredentialUseCase,
    GetUserProfileUseCase,
    LoginUserUseCase,
    MarkBrokerageCredentialAuthenticatedUseCase,
    RegisterUserUseCase,
    StoreBrokerageCredentialUseCase,
    UpdateUserProfileUseCase,
)

log = logging.getLogger(__name__)

_ENV_NAME_KEY = "STOCKTRACKER_ENV"
_IDENTITY_FAIL_FAST_KEY = "IDENTITY_FAIL_FAST"
_JWT_SECRET_KEY = "JWT_SECRET"
_JWT_TTL_DAYS_KEY = "JWT_TTL_DAYS"
_IDENTITY_PG_DSN_KEY = "IDENTITY_PG_DSN"
_IDENTITY_BCRYPT_ROUNDS_KEY = "IDENTITY_BCRYPT_ROUNDS"
_DEV_JWT_SECRET = "dev-stocktracker-jwt-secret"
_ALLOWED_ENVS = ("dev", "prod", "test")


@dataclass(frozen=True, slots=True)
class IdentityRuntimeSettings:
    """
    IdentityRuntimeSettings — runtime policy for identity wiring.

    Related:
      - apps/api/wiring/modules/identity.py
      - apps/api/main/app.py
    """

    env_name: str
    fail_fast: bool
    jwt_ttl_days: int
    jwt_secret: str = field(repr=False)
    postgres_dsn: str = field(repr=False)
    bcrypt_rounds: int

    def __post_init__(self) -> None:
        """
        Validate identity runtime settings invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Values are normalized by resolver before dataclass construction.
        Raises:
            ValueError: If one of invariants is violated.
        Side Effects:
            None.
        """
        if self.env_name not in _ALLOWED_ENVS:
            raise ValueError(
                f"IdentityRuntimeSettings.env_name must be one of {_ALLOWED_ENVS}, "
                f"got {self.env_name!r}"
            )
        if self.jwt_ttl_days <= 0:
            raise ValueError("IdentityRuntimeSettings.jwt_ttl_days must be > 0")
        if not self.jwt_secret:
            raise ValueError("IdentityRuntimeSettings.jwt_secret must be non-empty")
        if self.bcrypt_rounds < 4 or self.bcrypt_rounds > 31:
            raise ValueError("IdentityRuntimeSettings.bcrypt_rounds must be within [4, 31]")


@dataclass(frozen=True, slots=True)
class IdentityApiModule:
    """
    IdentityApiModule — wired identity router plus the shared current-user dependency.
    """

    router: APIRouter
    current_user_dependency: RequireCurrentUserDependency


def build_identity_api_module(*, environ: Mapping[str, str]) -> IdentityApiModule:
    """
    Build fully wired identity module from environment settings.

    Related:
      - apps/api/routes/identity.py
      - src/stocktracker/contexts/identity/adapters/outbound/__init__.py
      - apps/api/main/app.py

    Args:
        environ: Runtime environment mapping.
    Returns:
        IdentityApiModule: Router and current-user dependency.
    Assumptions:
        Without fail-fast the encryption key is read lazily on first cipher call.
    Raises:
        ValueError: If settings are invalid or fail-fast policy finds missing secrets.
    Side Effects:
        With fail-fast, reads and validates `ENCRYPTION_KEY` once.
    """
    settings = _resolve_identity_runtime_settings(environ=environ)
    clock = SystemIdentityClock()
    user_repository = _build_user_repository(settings=settings)
    credentials_repository = _build_credentials_repository(settings=settings)
    password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    jwt_codec = Hs256JwtCodec(secret_key=settings.jwt_secret, clock=clock)
    token_issuer = AccessTokenIssuer(
        jwt_codec=jwt_codec,
        clock=clock,
        jwt_ttl_days=settings.jwt_ttl_days,
    )

    key_source = EnvironmentCredentialKeySource(environ=environ)
    if settings.fail_fast:
        key_source.load()
    cipher = AesGcmCredentialCipher(key_source=key_source)

    current_user_dependency = RequireCurrentUserDependency(
        current_user=JwtBearerCurrentUser(
            jwt_codec=jwt_codec,
            user_repository=user_repository,
        ),
    )
    router = build_identity_api_router(
        register_user=RegisterUserUseCase(
            user_repository=user_repository,
            password_hasher=password_hasher,
            token_issuer=token_issuer,
            clock=clock,
        ),
        login_user=LoginUserUseCase(
            user_repository=user_repository,
            password_hasher=password_hasher,
            token_issuer=token_issuer,
        ),
        get_user_profile=GetUserProfileUseCase(user_repository=user_repository),
        update_user_profile=UpdateUserProfileUseCase(
            user_repository=user_repository,
            password_hasher=password_hasher,
            clock=clock,
        ),
        store_brokerage_credential=StoreBrokerageCredentialUseCase(
            repository=credentials_repository,
            cipher=cipher,
            clock=clock,
        ),
        get_brokerage_credential=GetBrokerageCredentialUseCase(
            repository=credentials_repository,
        ),
        get_decrypted_brokerage_credential=GetDecryptedBrokerageCredentialUseCase(
            repository=credentials_repository,
            cipher=cipher,
        ),
        mark_brokerage_credential_authenticated=MarkBrokerageCredentialAuthenticatedUseCase(
            repository=credentials_repository,
            clock=clock,
        ),
        delete_brokerage_credential=DeleteBrokerageCredentialUseCase(
            repository=credentials_repository,
        ),
        current_user_dependency=current_user_dependency,
    )
    log.info(
        "identity module wired: env=%s fail_fast=%s storage=%s",
        settings.env_name,
        settings.fail_fast,
        "postgres" if settings.postgres_dsn else "in_memory",
    )
    return IdentityApiModule(router=router, current_user_dependency=current_user_dependency)


def _build_user_repository(*, settings: IdentityRuntimeSettings) -> UserRepository:
    """
    Build user repository adapter based on runtime DSN availability.

    Args:
        settings: Resolved runtime settings.
    Returns:
        UserRepository: Postgres or in-memory adapter.
    Assumptions:
        Postgres DSN is optional in dev/test, in-memory fallback is acceptable for local runs.
    Raises:
        ValueError: If Postgres DSN is malformed for gateway construction.
    Side Effects:
        None.
    """
    if settings.postgres_dsn:
        gateway = PsycopgIdentityPostgresGateway(dsn=settings.postgres_dsn)
        return PostgresIdentityUserRepository(gateway=gateway)
    return InMemoryIdentityUserRepository()


def _build_credentials_repository(
    *,
    settings: IdentityRuntimeSettings,
) -> BrokerageCredentialsRepository:
    if settings.postgres_dsn:
        gateway = PsycopgIdentityPostgresGateway(dsn=settings.postgres_dsn)
        return PostgresIdentityBrokerageCredentialsRepository(gateway=gateway)
    return InMemoryIdentityBrokerageCredentialsRepository()


def _resolve_identity_runtime_settings(*, environ: Mapping[str, str]) -> IdentityRuntimeSettings:
    """
    Resolve identity runtime settings with fail-fast policy and defaults.

    Args:
        environ: Runtime environment mapping.
    Returns:
        IdentityRuntimeSettings: Validated normalized settings.
    Assumptions:
        Missing `STOCKTRACKER_ENV` defaults to `dev`.
    Raises:
        ValueError: If env values are invalid or fail-fast policy requires missing secrets.
    Side Effects:
        None.
    """
    env_name = _resolve_env_name(environ=environ)
    fail_fast = _resolve_fail_fast(environ=environ, env_name=env_name)

    jwt_ttl_days = _resolve_positive_int(environ=environ, key=_JWT_TTL_DAYS_KEY, default=7)
    bcrypt_rounds = _resolve_positive_int(
        environ=environ,
        key=_IDENTITY_BCRYPT_ROUNDS_KEY,
        default=10,
    )
    jwt_secret = environ.get(_JWT_SECRET_KEY, "").strip()

    if fail_fast:
        if not jwt_secret:
            raise ValueError(f"{_JWT_SECRET_KEY} must be set when {_IDENTITY_FAIL_FAST_KEY}=true")
        if not environ.get(ENCRYPTION_KEY_ENV, "").strip():
            raise ValueError(
                f"{ENCRYPTION_KEY_ENV} must be set when {_IDENTITY_FAIL_FAST_KEY}=true"
            )

    return IdentityRuntimeSettings(
        env_name=env_name,
        fail_fast=fail_fast,
        jwt_ttl_days=jwt_ttl_days,
        jwt_secret=jwt_secret or _DEV_JWT_SECRET,
        postgres_dsn=environ.get(_IDENTITY_PG_DSN_KEY, "").strip(),
        bcrypt_rounds=bcrypt_rounds,
    )


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    raw_env_name = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env_name not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env_name!r}"
        )
    return raw_env_name


def _resolve_fail_fast(*, environ: Mapping[str, str], env_name: str) -> bool:
    """
    Resolve fail-fast policy for identity startup validation.

    Args:
        environ: Runtime environment mapping.
        env_name: Normalized environment name.
    Returns:
        bool: Effective fail-fast flag.
    Assumptions:
        Default is enabled for `prod` and disabled for `dev`/`test`.
    Raises:
        ValueError: If override value is not parseable as boolean.
    Side Effects:
        None.
    """
    default_fail_fast = env_name == "prod"
    raw_override = environ.get(_IDENTITY_FAIL_FAST_KEY, "").strip()
    if not raw_override:
        return default_fail_fast
    return _parse_bool(raw_value=raw_override, key=_IDENTITY_FAIL_FAST_KEY)


def _resolve_positive_int(*, environ: Mapping[str, str], key: str, default: int) -> int:
    raw_value = environ.get(key, "").strip()
    if not raw_value:
        return default
    try:
        parsed = int(raw_value)
    except ValueError as error:
        raise ValueError(f"{key} must be integer, got {raw_value!r}") from error
    if parsed <= 0:
        raise ValueError(f"{key} must be > 0, got {parsed}")
    return parsed


def _parse_bool(*, raw_value: str, key: str) -> bool:
    """
    Parse strict boolean env value.

    Accepted true values: `1,true,yes,on`; false values: `0,false,no,off`.

    Raises:
        ValueError: If value is not recognized.
    """
    normalized = raw_value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(
        f"{key} must be a boolean literal (1/0/true/false/yes/no/on/off), got {raw_value!r}"
    )
