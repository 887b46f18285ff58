"""Resource service adapters."""

from e2e_harness.services.base import ResourceService
from e2e_harness.services.users import USERS_PATH, UsersService

__all__ = [
    "ResourceService",
    "UsersService",
    "USERS_PATH",
]
