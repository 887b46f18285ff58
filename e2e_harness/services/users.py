"""Service object for the users resource."""

from e2e_harness.services.base import ResourceService

USERS_PATH = "/api/users"

# Fields every user payload returned by the API carries
USER_FIELDS = ("id", "name", "email")


class UsersService(ResourceService):
    path = USERS_PATH


__all__ = ["UsersService", "USERS_PATH", "USER_FIELDS"]
