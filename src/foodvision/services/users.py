"""User authentication and first-sight provisioning."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from foodvision.services.profiles import ProfileService


class IdentityProvider(Protocol):
    """Interface for the external authentication provider."""

    def resolve_user(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token, if any."""


@dataclass
class UserService:
    """Application service for authenticated users."""

    identity_provider: IdentityProvider
    profile_service: ProfileService

    def authenticate(self, access_token: str) -> UUID | None:
        """Resolve the token and make sure the user has a profile."""
        user_id = self.identity_provider.resolve_user(access_token)
        if user_id is None:
            return None
        self.profile_service.ensure_profile(user_id)
        return user_id
