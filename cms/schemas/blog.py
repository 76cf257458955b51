from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


def split_list(value: Union[str, List[str], None]) -> List[str]:
    """Accept a list or a comma-separated string; trim and drop empty items."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, (list, tuple)):
        raise ValueError("expected a list or a comma-separated string")
    return [str(item).strip() for item in value if str(item).strip()]


class Post(BaseModel):
    id: str
    slug: str
    title: str
    author: str = "Admin"
    date: str
    excerpt: str = ""
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    image: str = ""
    metaDescription: str = ""
    status: str = "published"
    publishDate: str
    updatedAt: str
    content: str


class PostInput(BaseModel):
    title: str = ""
    content: str = ""
    author: Optional[str] = None
    excerpt: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    image: Optional[str] = None

    @field_validator("tags", "categories", mode="before")
    @classmethod
    def _split_list(cls, value):
        return split_list(value)


class CreatePostResult(BaseModel):
    success: bool = True
    slug: str


class OperationResult(BaseModel):
    success: bool = True
