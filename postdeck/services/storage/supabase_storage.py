"""
Supabase Storage bucket implementation.

Talks to the Storage REST API with httpx. Uploads use ``x-upsert`` so a
repeated write of the same key succeeds.
"""

from urllib.parse import quote

from httpx import AsyncClient, HTTPError, Response, Timeout

from postdeck.configs.settings import settings
from postdeck.services.storage.base import BucketError


class SupabaseBucket:
    """Bucket backed by Supabase Storage (the ``cover_image`` bucket by default)."""

    def __init__(
        self,
        client: AsyncClient | None = None,
        bucket: str | None = None,
        base_url: str | None = None,
        service_key: str | None = None,
    ) -> None:
        self.bucket = bucket or settings.COVER_IMAGE_BUCKET
        self.base_url = (base_url or settings.SUPABASE_URL).rstrip("/")
        key = service_key if service_key is not None else settings.SUPABASE_SERVICE_KEY.get_secret_value()
        self._headers = {"Authorization": f"Bearer {key}", "apikey": key}
        self._client = client or AsyncClient(timeout=Timeout(settings.IDENTITY_TIMEOUT))

    def _object_url(self, key: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{quote(key)}"

    @staticmethod
    def _diagnostic(response: Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if not isinstance(body, dict):
            return response.text or response.reason_phrase
        return body.get("message") or body.get("error") or response.reason_phrase

    async def write(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        *,
        overwrite: bool = True,
    ) -> None:
        headers = {
            **self._headers,
            "Content-Type": content_type,
            "x-upsert": "true" if overwrite else "false",
        }
        try:
            response = await self._client.post(self._object_url(key), content=data, headers=headers)
        except HTTPError as e:
            raise BucketError(str(e) or type(e).__name__) from e

        if response.is_error:
            raise BucketError(self._diagnostic(response))

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(key)}"

    async def exists(self, key: str) -> bool:
        try:
            response = await self._client.head(self.public_url(key))
        except HTTPError as e:
            raise BucketError(str(e) or type(e).__name__) from e
        return response.is_success

    async def aclose(self) -> None:
        await self._client.aclose()
