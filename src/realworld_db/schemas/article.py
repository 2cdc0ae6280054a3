"""Article-related Pydantic schemas."""

from pydantic import BaseModel, Field, field_validator


def _clean_tags(tags: list[str]) -> list[str]:
    """Strip whitespace, drop empty entries and duplicates while keeping order."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            cleaned.append(tag)
    return cleaned


class ArticleCreate(BaseModel):
    """Payload for a new article.

    When ``slug`` is omitted it is derived from the title.
    """

    title: str = Field(..., min_length=1)
    description: str = Field(...)
    body: str = Field(...)
    tag_list: list[str] = Field(default_factory=list, description="Ordered tags")
    slug: str | None = Field(None, min_length=1, description="Precomputed unique slug")

    @field_validator("tag_list")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class ArticleUpdate(BaseModel):
    """Partial update of an article; unset fields are left alone.

    The slug only changes when given explicitly, so existing links keep
    working after a title edit.
    """

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    body: str | None = None
    tag_list: list[str] | None = None
    slug: str | None = Field(None, min_length=1)

    @field_validator("title", "description", "body", "tag_list", "slug")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("tag_list")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)
