from typing import Optional

from pydantic import BaseModel, field_validator


class Comment(BaseModel):
    id: str
    postSlug: str
    author: str
    email: str = ""
    content: str
    parentId: Optional[str] = None
    approved: bool = False
    isAdmin: bool = False
    createdAt: Optional[str] = None


class CommentCreate(BaseModel):
    postSlug: str = ""
    author: str = ""
    email: Optional[str] = None
    content: str = ""
    parentId: Optional[str] = None


class CommentCreated(BaseModel):
    id: str
    postSlug: str
    author: str
    content: str
    approved: bool = False


class Subscriber(BaseModel):
    id: str
    email: str
    postSlug: Optional[str] = None
    subscribedAt: Optional[str] = None


class SubscribeRequest(BaseModel):
    email: str = ""
    postSlug: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class SubscribeResult(BaseModel):
    success: bool = True
    message: str
    id: str


class Overview(BaseModel):
    posts: int
    comments: int
    pendingComments: int
    subscribers: int
