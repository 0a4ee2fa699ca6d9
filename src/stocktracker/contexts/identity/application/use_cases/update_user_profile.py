from __future__ import annotations

from dataclasses import replace
from typing import NoReturn

from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.ports.password_hasher import PasswordHasher
from stocktracker.contexts.identity.application.ports.user_repository import UserRepository
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    EmailAlreadyRegisteredError,
    UsernameAlreadyTakenError,
    UserNotFoundError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    UserView,
    to_user_view,
)
from stocktracker.contexts.identity.application.use_cases.identity_validation import (
    ensure_utc_datetime,
    normalize_email,
    normalize_username,
    validate_password,
)
from stocktracker.contexts.identity.domain.entities import User
from stocktracker.shared_kernel.primitives import UserId


class UpdateUserProfileUseCase:
    """
    UpdateUserProfileUseCase — partial update of email, username, and password.

    Related:
      - src/stocktracker/contexts/identity/application/ports/user_repository.py
      - src/stocktracker/contexts/identity/application/use_cases/identity_validation.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        clock: IdentityClock,
    ) -> None:
        if user_repository is None:  # type: ignore[truthy-bool]
            raise ValueError("UpdateUserProfileUseCase requires user_repository")
        if password_hasher is None:  # type: ignore[truthy-bool]
            raise ValueError("UpdateUserProfileUseCase requires password_hasher")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("UpdateUserProfileUseCase requires clock")

        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._clock = clock

    def update(
        self,
        *,
        user_id: UserId,
        email: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> UserView:
        """
        Apply provided fields to the user.

        Args:
            user_id: Authenticated user id.
            email: New email or `None` to keep.
            username: New username or `None` to keep.
            password: New plaintext password or `None` to keep.
        Returns:
            UserView: Updated profile.
        Assumptions:
            Empty strings count as "not provided", matching form submissions.
        Raises:
            IdentityValidationError: If a provided field is invalid.
            EmailAlreadyRegisteredError: If email belongs to another user.
            UsernameAlreadyTakenError: If username belongs to another user.
            UserNotFoundError: If user does not exist.
        Side Effects:
            May hash password and writes one user row.
        """
        existing = self._user_repository.find_by_user_id(user_id=user_id)
        if existing is None:
            raise UserNotFoundError()

        new_email = existing.email
        if email:
            new_email = normalize_email(email=email)
            if new_email != existing.email:
                self._ensure_email_free(email=new_email, user_id=user_id)

        new_username = existing.username
        if username:
            new_username = normalize_username(username=username)
            if new_username != existing.username:
                self._ensure_username_free(username=new_username, user_id=user_id)

        new_password_hash = existing.password_hash
        if password:
            new_password_hash = self._password_hasher.hash_password(
                password=validate_password(password=password)
            )

        now = ensure_utc_datetime(value=self._clock.now(), field_name="clock.now")
        candidate = replace(
            existing,
            email=new_email,
            username=new_username,
            password_hash=new_password_hash,
            updated_at=max(now, existing.updated_at),
        )
        updated = self._user_repository.update(user=candidate)
        if updated is None:
            self._raise_update_failure(candidate=candidate)
        return to_user_view(user=updated)

    def _ensure_email_free(self, *, email: str, user_id: UserId) -> None:
        owner = self._user_repository.find_by_email(email=email)
        if owner is not None and owner.user_id != user_id:
            raise EmailAlreadyRegisteredError()

    def _ensure_username_free(self, *, username: str, user_id: UserId) -> None:
        owner = self._user_repository.find_by_username(username=username)
        if owner is not None and owner.user_id != user_id:
            raise UsernameAlreadyTakenError()

    def _raise_update_failure(self, *, candidate: User) -> NoReturn:
        if self._user_repository.find_by_user_id(user_id=candidate.user_id) is None:
            raise UserNotFoundError()
        self._ensure_email_free(email=candidate.email, user_id=candidate.user_id)
        raise UsernameAlreadyTakenError()
