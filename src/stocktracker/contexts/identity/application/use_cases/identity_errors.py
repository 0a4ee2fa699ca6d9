from __future__ import annotations


class IdentityOperationError(ValueError):
    """
    IdentityOperationError — application error of identity flows with HTTP status mapping.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - src/stocktracker/contexts/identity/application/use_cases/store_brokerage_credential.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    def __init__(self, *, code: str, message: str, status_code: int) -> None:
        """
        Initialize operation error fields for HTTP mapping.

        Args:
            code: Machine-readable error code.
            message: Human-readable message.
            status_code: HTTP status expected by inbound adapters.
        Returns:
            None.
        Assumptions:
            Error mapping is one-to-one with API responses.
        Raises:
            None.
        Side Effects:
            None.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    def payload(self) -> dict[str, str]:
        """
        Build payload with stable key order.

        Returns:
            dict[str, str]: `{"error": "...", "message": "..."}` payload.
        """
        return {
            "error": self.code,
            "message": self.message,
        }


class IdentityValidationError(IdentityOperationError):
    """IdentityValidationError — 422 for invalid account or credential input."""

    def __init__(self, *, message: str) -> None:
        super().__init__(code="validation_error", message=message, status_code=422)


class EmailAlreadyRegisteredError(IdentityOperationError):
    """EmailAlreadyRegisteredError — 409 when another account owns the email."""

    def __init__(self) -> None:
        super().__init__(
            code="email_already_registered",
            message="Email already registered",
            status_code=409,
        )


class UsernameAlreadyTakenError(IdentityOperationError):
    """UsernameAlreadyTakenError — 409 when another account owns the username."""

    def __init__(self) -> None:
        super().__init__(
            code="username_already_taken",
            message="Username already taken",
            status_code=409,
        )


class InvalidCredentialsError(IdentityOperationError):
    """
    InvalidCredentialsError — 401 for failed login.

    Unknown email and wrong password intentionally share one message.
    """

    def __init__(self) -> None:
        super().__init__(
            code="invalid_credentials",
            message="Invalid email or password",
            status_code=401,
        )


class UserNotFoundError(IdentityOperationError):
    def __init__(self) -> None:
        super().__init__(code="user_not_found", message="User not found", status_code=404)


class BrokerageCredentialNotFoundError(IdentityOperationError):
    """BrokerageCredentialNotFoundError — 404 when the user has no stored credential."""

    def __init__(self, *, message: str = "No Webull credentials found") -> None:
        super().__init__(
            code="brokerage_credential_not_found",
            message=message,
            status_code=404,
        )
