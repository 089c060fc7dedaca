"""
User Context
============
Identity used to namespace persisted collections. Supplied by the identity
platform at the boundary and injected into the persistence layer, never
looked up from global state.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserContext:
    """Authenticated user identity, or the anonymous/default namespace."""

    user_id: str | None = None

    def __post_init__(self):
        if self.user_id is not None:
            cleaned = str(self.user_id).strip()
            object.__setattr__(self, "user_id", cleaned or None)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def anonymous(cls) -> UserContext:
        return cls(None)

    def namespaced(self, base_key: str) -> str:
        """``base_key`` unchanged when anonymous, otherwise suffixed with the user id."""
        if self.user_id is None:
            return base_key
        return f"{base_key}_{self.user_id}"
