"""User management service - operator accounts and default seeding."""

import logging
from typing import List

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import UsernameTakenError

User = get_user_model()

logger = logging.getLogger(__name__)


DEFAULT_USERS = (
    ('admin', 'admin123', UserRole.ADMIN),
    ('viewer', 'viewer123', UserRole.VIEWER),
    ('demo_admin', 'demo123', UserRole.ADMIN),
    ('test_user', 'test123', UserRole.VIEWER),
)


def create_user(*, username: str, password: str, role: str = UserRole.VIEWER) -> User:
    """
    Create a dashboard user with a hashed password.

    Args:
        username: Unique login name
        password: Plaintext password (hashed before storage)
        role: 'admin' or 'viewer' (default viewer)

    Returns:
        Created User instance

    Raises:
        UsernameTakenError: If the username already exists
    """
    if User.objects.filter(username=username).exists():
        raise UsernameTakenError("Username already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                password=password,
                role=role,
            )
    except IntegrityError:
        # Lost a race with a concurrent create of the same username
        raise UsernameTakenError("Username already exists")

    logger.info("Created user %s (%s)", user.username, user.role)
    return user


def list_users():
    """Return all users ordered by username."""
    return User.objects.order_by('username')


def seed_default_users() -> List[User]:
    """
    Create the default operator accounts if no users exist yet.

    Returns:
        List of users created (empty when users were already present)
    """
    if User.objects.exists():
        logger.info("Users already exist, skipping user seeding")
        return []

    created = []
    for username, password, role in DEFAULT_USERS:
        created.append(create_user(username=username, password=password, role=role))

    logger.info("Seeded %d default users", len(created))
    return created
