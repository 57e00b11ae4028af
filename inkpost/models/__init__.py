"""SQLAlchemy ORM models."""

from inkpost.models.base import Base
from inkpost.models.blog_post import BlogPost, Comment, PostLike
from inkpost.models.user import User

__all__ = ["Base", "BlogPost", "Comment", "PostLike", "User"]
