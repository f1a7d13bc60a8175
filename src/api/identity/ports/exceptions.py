"""Domain exceptions for the Identity bounded context."""

from shared_kernel.exceptions import RepositoryError


class DuplicateAuthIdentityError(RepositoryError):
    """Raised when creating a user for an auth id that already has one.

    Two deliveries from a never-before-seen user can both observe "not
    found" and race to create. The loser gets this error and should look
    the user up again instead of retrying creation.
    """

    def __init__(self, auth_id: str):
        super().__init__(f"A user already exists for auth id: {auth_id}")
        self.auth_id = auth_id


class ProfileFetchError(Exception):
    """Raised when the identity provider cannot return a profile."""

    pass
