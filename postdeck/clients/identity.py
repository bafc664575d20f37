"""
Identity provider clients.

An identity provider turns a bearer credential into a subject id and
answers whether that subject holds administrator privilege. Two
implementations are available: locally verified JWTs with privilege read
from the ``profiles`` table, and Supabase Auth with privilege read through
the PostgREST ``profiles`` endpoint.
"""

from logging import getLogger
from typing import Any, Protocol, runtime_checkable

from httpx import AsyncClient, HTTPError, Response, Timeout
from jose import JWTError, jwt
from sqlalchemy.exc import SQLAlchemyError

from postdeck.configs import file_logger, settings
from postdeck.db.database import SessionMaker, get_session_maker
from postdeck.repositories import ProfileRepository

logger = file_logger(getLogger(__name__))


class IdentityProviderError(Exception):
    """Raised when a credential is rejected or a lookup cannot be completed."""


@runtime_checkable
class IdentityProvider(Protocol):
    """Protocol for identity provider implementations."""

    async def verify_credential(self, token: str) -> str:
        """Return the subject id for a valid token."""
        ...

    async def get_privilege_flag(self, subject_id: str) -> bool:
        """Return whether the subject holds administrator privilege."""
        ...


class JwtIdentityProvider:
    """Verifies signed JWTs locally and reads privilege from the database."""

    def __init__(
        self,
        session_maker: SessionMaker | None = None,
        secret: str | None = None,
        algorithm: str | None = None,
        audience: str | None = None,
    ) -> None:
        self.session_maker = session_maker or get_session_maker()
        self._secret = secret if secret is not None else settings.JWT_SECRET.get_secret_value()
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.audience = audience if audience is not None else settings.JWT_AUDIENCE

    async def verify_credential(self, token: str) -> str:
        """
        Decode and verify a JWT.

        Args:
            token: Encoded JWT without the ``Bearer`` prefix

        Returns:
            str: The ``sub`` claim

        Raises:
            IdentityProviderError: If the signature, expiry or audience is invalid,
                or the token has no subject
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            raise IdentityProviderError(f"Invalid token: {e}") from e

        subject = payload.get("sub")
        if not subject:
            raise IdentityProviderError("Token has no subject")
        return str(subject)

    async def get_privilege_flag(self, subject_id: str) -> bool:
        try:
            async with self.session_maker() as session:
                is_admin = await ProfileRepository(session).is_admin(subject_id)
        except SQLAlchemyError as e:
            raise IdentityProviderError("Privilege lookup failed") from e
        return bool(is_admin)


def _json_body(response: Response, source: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise IdentityProviderError(f"{source} returned a non-JSON body") from e


class SupabaseIdentityProvider:
    """Resolves identities through Supabase Auth and the profiles REST endpoint."""

    def __init__(
        self,
        client: AsyncClient | None = None,
        base_url: str | None = None,
        anon_key: str | None = None,
        service_key: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.SUPABASE_URL).rstrip("/")
        self._anon_key = anon_key if anon_key is not None else settings.SUPABASE_ANON_KEY.get_secret_value()
        self._service_key = (
            service_key if service_key is not None else settings.SUPABASE_SERVICE_KEY.get_secret_value()
        )
        self._client = client or AsyncClient(timeout=Timeout(settings.IDENTITY_TIMEOUT))

    async def verify_credential(self, token: str) -> str:
        try:
            response = await self._client.get(
                f"{self.base_url}/auth/v1/user",
                headers={"apikey": self._anon_key, "Authorization": f"Bearer {token}"},
            )
        except HTTPError as e:
            raise IdentityProviderError(f"Identity provider unreachable: {type(e).__name__}") from e

        if response.is_error:
            raise IdentityProviderError(f"Credential rejected ({response.status_code})")

        body = _json_body(response, "Identity provider")
        subject = body.get("id") if isinstance(body, dict) else None
        if not subject:
            raise IdentityProviderError("Identity provider returned no subject")
        return str(subject)

    async def get_privilege_flag(self, subject_id: str) -> bool:
        try:
            response = await self._client.get(
                f"{self.base_url}/rest/v1/profiles",
                params={"id": f"eq.{subject_id}", "select": "is_admin"},
                headers={"apikey": self._service_key, "Authorization": f"Bearer {self._service_key}"},
            )
        except HTTPError as e:
            raise IdentityProviderError(f"Privilege lookup failed: {type(e).__name__}") from e

        if response.is_error:
            raise IdentityProviderError(f"Privilege lookup failed ({response.status_code})")

        rows = _json_body(response, "Privilege lookup")
        if not isinstance(rows, list):
            raise IdentityProviderError("Privilege lookup returned an unexpected payload")
        if not rows:
            return False
        if not isinstance(rows[0], dict):
            raise IdentityProviderError("Privilege lookup returned an unexpected row")
        return bool(rows[0].get("is_admin"))

    async def aclose(self) -> None:
        await self._client.aclose()


def get_identity_provider() -> IdentityProvider:
    """
    Get the configured identity provider.

    Returns the implementation selected by the IDENTITY_PROVIDER setting.
    """
    if settings.IDENTITY_PROVIDER == "supabase":
        return SupabaseIdentityProvider()
    return JwtIdentityProvider()
