"""Authentication adapters.

Authentication in this server is a stub: providers resolve a request to an
optional user, and the mock provider exists so the dashboard can be exercised
without a real identity system. Replace the provider, not the call sites.
"""

from app.adapters.auth.base import AbstractAuthProvider
from app.adapters.auth.factory import create_auth_provider
from app.adapters.auth.mock import AnonymousAuthProvider, MockAuthProvider

__all__ = [
    "AbstractAuthProvider",
    "AnonymousAuthProvider",
    "MockAuthProvider",
    "create_auth_provider",
]
