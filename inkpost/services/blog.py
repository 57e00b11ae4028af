"""Blog posts: listing, creation, deletion, likes and comments."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session, selectinload

from inkpost.models import BlogPost, Comment, PostLike
from inkpost.schemas.auth import CurrentUser
from inkpost.services.authorization import ForbiddenError, can_mutate

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 150


class PostNotFoundError(Exception):
    """No post exists with the requested id."""

    def __init__(self, post_id: int) -> None:
        self.post_id = post_id
        self.message = "Post not found"
        super().__init__(self.message)


def make_excerpt(content: str) -> str:
    """First EXCERPT_LENGTH characters of content followed by '...'."""
    return content[:EXCERPT_LENGTH] + "..."


def _posts_query(db: Session):
    return db.query(BlogPost).options(
        selectinload(BlogPost.comments).joinedload(Comment.user),
        selectinload(BlogPost.likes),
    )


def list_posts(db: Session) -> list[BlogPost]:
    """All posts, newest first."""
    return (
        _posts_query(db)
        .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .all()
    )


def list_user_posts(db: Session, user_id: int) -> list[BlogPost]:
    """Posts written by user_id, newest first."""
    return (
        _posts_query(db)
        .filter(BlogPost.author_id == user_id)
        .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        .all()
    )


def get_post(db: Session, post_id: int) -> BlogPost:
    """Return one post. Raises PostNotFoundError if absent."""
    post = _posts_query(db).filter(BlogPost.id == post_id).first()
    if post is None:
        raise PostNotFoundError(post_id)
    return post


def create_post(
    db: Session,
    author: CurrentUser,
    title: str,
    content: str,
    image: str = "",
    tags: list[str] | None = None,
) -> BlogPost:
    """Create a post owned by author."""
    post = BlogPost(
        title=title,
        content=content,
        excerpt=make_excerpt(content),
        image=image,
        tags=list(tags or []),
        author_id=author.id,
        created_at=datetime.now(UTC),
    )
    db.add(post)
    db.commit()
    logger.info("Created blog post %s", post.id, extra={"post_id": post.id, "user_id": author.id})
    return get_post(db, post.id)


def delete_post(db: Session, post_id: int, identity: CurrentUser) -> None:
    """
    Delete a post if identity owns it or is an admin.

    Raises PostNotFoundError or ForbiddenError; in the latter case the post is untouched.
    """
    post = db.query(BlogPost).filter(BlogPost.id == post_id).first()
    if post is None:
        raise PostNotFoundError(post_id)
    if not can_mutate(post.author_id, identity):
        raise ForbiddenError("Not authorized to delete this post")
    db.delete(post)
    db.commit()
    logger.info("Deleted blog post %s", post_id, extra={"post_id": post_id, "user_id": identity.id})


def toggle_like(db: Session, post_id: int, identity: CurrentUser) -> BlogPost:
    """Like the post, or remove the like if identity already liked it."""
    post = db.query(BlogPost).filter(BlogPost.id == post_id).first()
    if post is None:
        raise PostNotFoundError(post_id)
    like = (
        db.query(PostLike)
        .filter(PostLike.post_id == post_id, PostLike.user_id == identity.id)
        .first()
    )
    if like is None:
        db.add(PostLike(post_id=post_id, user_id=identity.id))
    else:
        db.delete(like)
    db.commit()
    return get_post(db, post_id)


def add_comment(db: Session, post_id: int, identity: CurrentUser, text: str) -> BlogPost:
    """Add a comment; the post's comments come back newest first."""
    post = db.query(BlogPost).filter(BlogPost.id == post_id).first()
    if post is None:
        raise PostNotFoundError(post_id)
    db.add(
        Comment(
            post_id=post_id,
            user_id=identity.id,
            text=text,
            date=datetime.now(UTC),
        )
    )
    db.commit()
    return get_post(db, post_id)
