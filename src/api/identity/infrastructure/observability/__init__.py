"""Domain-Oriented Observability for Identity infrastructure."""

from identity.infrastructure.observability.profile_client_probe import (
    DefaultProfileClientProbe,
    ProfileClientProbe,
)
from identity.infrastructure.observability.repository_probe import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "DefaultProfileClientProbe",
    "DefaultUserRepositoryProbe",
    "ProfileClientProbe",
    "UserRepositoryProbe",
]
