from postdeck.clients.identity import (
    IdentityProvider,
    IdentityProviderError,
    JwtIdentityProvider,
    SupabaseIdentityProvider,
    get_identity_provider,
)

__all__ = [
    "IdentityProvider",
    "IdentityProviderError",
    "JwtIdentityProvider",
    "SupabaseIdentityProvider",
    "get_identity_provider",
]
