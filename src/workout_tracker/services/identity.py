"""Identity resolution for the current request."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller."""

    id: str


class IdentityResolver(Protocol):
    """Resolves the authenticated user from request credentials."""

    def resolve(
        self, authorization: str | None, session_cookie: str | None
    ) -> CurrentUser | None:
        """Return the current user, or None when no valid session exists."""
