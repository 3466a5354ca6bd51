"""Resolves Supabase Auth access tokens to user ids."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from foodvision.services.users import IdentityProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Supabase Auth."""

    client: Client

    def resolve_user(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            _logger.warning("Access token rejected by Supabase Auth", exc_info=True)
            return None
        if response is None or response.user is None:
            return None
        return UUID(str(response.user.id))
