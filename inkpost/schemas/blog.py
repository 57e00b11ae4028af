"""Request/response schemas for blog posts, likes and comments."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreateRequest(BaseModel):
    """Body for creating a post."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    image: str = Field(default="", max_length=2048)
    tags: list[str] = Field(default_factory=list)


class CommentCreateRequest(BaseModel):
    comment: str = Field(..., min_length=1, max_length=10_000, description="Comment text")


class AuthorSummary(BaseModel):
    """Author or commenter reference embedded in post payloads."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    user: AuthorSummary
    date: datetime | None = None


class PostOut(BaseModel):
    """A post with its author, like user ids and comments (newest first)."""

    id: int
    title: str
    content: str
    excerpt: str
    image: str
    tags: list[str]
    author: AuthorSummary
    likes: list[int]
    comments: list[CommentOut]
    createdAt: datetime | None = None

    @classmethod
    def from_post(cls, post) -> "PostOut":
        """Build the payload from a BlogPost row with author, likes and comments loaded."""
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            excerpt=post.excerpt,
            image=post.image or "",
            tags=list(post.tags or []),
            author=AuthorSummary.model_validate(post.author),
            likes=[like.user_id for like in post.likes],
            comments=[CommentOut.model_validate(c) for c in post.comments],
            createdAt=post.created_at,
        )


class MessageResponse(BaseModel):
    message: str
