from .access_token_issuer import AccessTokenIssuer
from .delete_brokerage_credential import DeleteBrokerageCredentialUseCase
from .get_brokerage_credential import GetBrokerageCredentialUseCase
from .get_decrypted_brokerage_credential import GetDecryptedBrokerageCredentialUseCase
from .get_user_profile import GetUserProfileUseCase
from .identity_errors import (
    BrokerageCredentialNotFoundError,
    EmailAlreadyRegisteredError,
    IdentityOperationError,
    IdentityValidationError,
    InvalidCredentialsError,
    UsernameAlreadyTakenError,
    UserNotFoundError,
)
from .identity_models import (
    AuthResult,
    BrokerageCredentialView,
    DecryptedBrokerageCredential,
    UserView,
)
from .login_user import LoginUserUseCase
from .mark_brokerage_credential_authenticated import MarkBrokerageCredentialAuthenticatedUseCase
from .register_user import RegisterUserUseCase
from .store_brokerage_credential import StoreBrokerageCredentialUseCase
from .update_user_profile import UpdateUserProfileUseCase

__all__ = [
    "AccessTokenIssuer",
    "AuthResult",
    "BrokerageCredentialNotFoundError",
    "BrokerageCredentialView",
    "DecryptedBrokerageCredential",
    "DeleteBrokerageCredentialUseCase",
    "EmailAlreadyRegisteredError",
    "GetBrokerageCredentialUseCase",
    "GetDecryptedBrokerageCredentialUseCase",
    "GetUserProfileUseCase",
    "IdentityOperationError",
    "IdentityValidationError",
    "InvalidCredentialsError",
    "LoginUserUseCase",
    "MarkBrokerageCredentialAuthenticatedUseCase",
    "RegisterUserUseCase",
    "StoreBrokerageCredentialUseCase",
    "UpdateUserProfileUseCase",
    "UserNotFoundError",
    "UserView",
    "UsernameAlreadyTakenError",
]
