"""ORM models for blog posts, their comments and likes."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from inkpost.models.base import Base


class BlogPost(Base):
    """
    A blog post owned by exactly one user (author_id, set at creation).

    excerpt is derived from content when the post is created.
    """

    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(255), nullable=False, default="")
    image = Column(String(2048), nullable=False, default="")
    tags = Column(JSON, nullable=False, default=lambda: [])
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    author = relationship("User", lazy="joined")
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id.desc()",
    )
    likes = relationship(
        "PostLike",
        back_populates="post",
        cascade="all, delete-orphan",
    )


class Comment(Base):
    """A comment left on a post; newest comments are listed first."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("blog_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    text = Column(Text, nullable=False)
    date = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    post = relationship("BlogPost", back_populates="comments")
    user = relationship("User", lazy="joined")


class PostLike(Base):
    """One like per (post, user) pair."""

    __tablename__ = "post_likes"

    post_id = Column(
        Integer,
        ForeignKey("blog_posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)

    post = relationship("BlogPost", back_populates="likes")
