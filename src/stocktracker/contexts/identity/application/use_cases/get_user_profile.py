from __future__ import annotations

from stocktracker.contexts.identity.application.ports.user_repository import UserRepository
from stocktracker.contexts.identity.application.use_cases.identity_errors import UserNotFoundError
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    UserView,
    to_user_view,
)
from stocktracker.shared_kernel.primitives import UserId


class GetUserProfileUseCase:
    """GetUserProfileUseCase — return public profile of the authenticated user."""

    def __init__(self, *, user_repository: UserRepository) -> None:
        if user_repository is None:  # type: ignore[truthy-bool]
            raise ValueError("GetUserProfileUseCase requires user_repository")
        self._user_repository = user_repository

    def get(self, *, user_id: UserId) -> UserView:
        user = self._user_repository.find_by_user_id(user_id=user_id)
        if user is None:
            raise UserNotFoundError()
        return to_user_view(user=user)
