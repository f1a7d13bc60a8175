"""Ports (interfaces) for the Identity bounded context.

Ports define the contracts for repositories and external services without
specifying implementation details.
"""

from identity.ports.exceptions import DuplicateAuthIdentityError, ProfileFetchError
from identity.ports.repositories import IProfileFetcher, IUserRepository

__all__ = [
    "DuplicateAuthIdentityError",
    "IProfileFetcher",
    "IUserRepository",
    "ProfileFetchError",
]
