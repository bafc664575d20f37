"""Authorization guard for administrative operations."""

from logging import getLogger

from postdeck.clients.identity import IdentityProvider, IdentityProviderError
from postdeck.configs import file_logger
from postdeck.errors.auth import ForbiddenError, UnauthenticatedError
from postdeck.schemas.auth import Identity
from postdeck.utils.helpers import strip_bearer

logger = file_logger(getLogger(__name__))


class AuthorizationGuard:
    """
    Decides whether a request may perform an administrative mutation.

    Authentication is always decided before privilege, so a request without
    a usable credential gets 401 even when it would also lack privilege.
    """

    def __init__(self, provider: IdentityProvider) -> None:
        """
        Initialize the guard.

        Args:
            provider: Identity provider used to verify credentials and look up privilege
        """
        self.provider = provider

    async def authenticate(self, credential: str | None) -> Identity:
        """
        Resolve an Authorization header value to an identity.

        Args:
            credential: Raw header value, with or without a ``Bearer`` prefix

        Returns:
            Identity: Authenticated identity (privilege not yet resolved)

        Raises:
            UnauthenticatedError: If the credential is missing, empty or rejected
        """
        token = strip_bearer(credential)
        if not token:
            raise UnauthenticatedError("Missing authorization credential")

        try:
            subject_id = await self.provider.verify_credential(token)
        except IdentityProviderError as e:
            logger.info(f"Credential rejected: {e}")
            raise UnauthenticatedError("Invalid or expired credential") from e

        return Identity(subject_id=subject_id)

    async def require_elevated(self, identity: Identity) -> Identity:
        """
        Ensure the identity holds administrator privilege.

        A failed privilege lookup is treated as no privilege.

        Raises:
            ForbiddenError: If the lookup fails or the flag is false
        """
        try:
            is_admin = await self.provider.get_privilege_flag(identity.subject_id)
        except IdentityProviderError as e:
            logger.warning(f"Privilege lookup failed for {identity.subject_id}: {e}")
            raise ForbiddenError from e

        if not is_admin:
            logger.info(f"Subject {identity.subject_id} lacks administrator privilege")
            raise ForbiddenError

        return identity.model_copy(update={"is_admin": True})

    async def authorize(self, credential: str | None) -> Identity:
        """Authenticate, then require privilege."""
        identity = await self.authenticate(credential)
        return await self.require_elevated(identity)
