"""Identifiers shared across bounded contexts."""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID


@dataclass(frozen=True)
class PrimaryUserId:
    """Identifier for a user, independent of any auth provider.

    Allocated by the system when a user is first seen. Both the identity
    and talk contexts key their records by it.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> PrimaryUserId:
        """Generate a new PrimaryUserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> PrimaryUserId:
        """Create PrimaryUserId from string value.

        Args:
            value: ULID string

        Returns:
            PrimaryUserId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid PrimaryUserId: {value}") from e

        return cls(value=value)
