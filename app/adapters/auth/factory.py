"""Factory for the request authentication provider."""

import logging

from app.adapters.auth.base import AbstractAuthProvider
from app.adapters.auth.mock import AnonymousAuthProvider, MockAuthProvider
from app.core.config import FeatureFlags

logger = logging.getLogger(__name__)


def create_auth_provider(flags: FeatureFlags) -> AbstractAuthProvider:
    """Pick the auth provider for the resolved feature flags.

    Args:
        flags: Flags resolved at startup.

    Returns:
        AbstractAuthProvider: The mock provider when mock auth is enabled,
            otherwise a provider that leaves every request anonymous.
    """
    if flags.mock_auth_enabled:
        logger.warning(
            "auth.mock_enabled",
            extra={"environment": flags.environment},
        )
        return MockAuthProvider()

    return AnonymousAuthProvider()
