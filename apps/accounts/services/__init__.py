"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UsernameTakenError,
    InvalidCredentialsError,
    InactiveAccountError,
)
from .user_authentication import authenticate_user
from .user_management import create_user, list_users, seed_default_users

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UsernameTakenError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    # Services
    'authenticate_user',
    'create_user',
    'list_users',
    'seed_default_users',
]
