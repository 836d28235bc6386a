# src/askit/schemas/tag.py
"""Tag and tag-category Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from askit.services.upsert import TagRef


class TagIn(BaseModel):
    """Tag reference by natural key; created on demand."""

    key: str = Field(..., min_length=1, max_length=255)
    category_id: int

    def to_ref(self) -> TagRef:
        """Return the natural key used by find-or-create."""
        return TagRef(key=self.key, category_id=self.category_id)


class TagUpdate(BaseModel):
    key: str | None = Field(None, min_length=1, max_length=255)
    category_id: int | None = None


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    category_id: int


class TagCategoryCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class TagCategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
