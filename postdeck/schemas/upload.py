from pydantic import BaseModel


class CoverImageUploadResponse(BaseModel):
    """Key and public URL of a stored cover image."""

    key: str
    url: str
