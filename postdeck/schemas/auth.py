from pydantic import BaseModel, Field


class Identity(BaseModel):
    """Identity resolved from a bearer credential for the current request."""

    subject_id: str = Field(alias="subjectId")
    is_admin: bool = Field(default=False, alias="isAdmin")

    model_config = {"populate_by_name": True, "frozen": True}
