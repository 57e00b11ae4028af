"""Blog endpoints: posts, likes and comments."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inkpost.api.v1.auth import get_current_user
from inkpost.core.database import get_db
from inkpost.schemas.auth import CurrentUser
from inkpost.schemas.blog import (
    CommentCreateRequest,
    MessageResponse,
    PostCreateRequest,
    PostOut,
)
from inkpost.services import blog
from inkpost.services.authorization import ForbiddenError

logger = logging.getLogger(__name__)
router = APIRouter()

SERVER_ERROR = "Server error"


def _server_error(action: str, e: Exception, detail: str = SERVER_ERROR) -> HTTPException:
    logger.exception("Error %s: %s", action, type(e).__name__)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _not_found(e: blog.PostNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("", response_model=list[PostOut])
def list_posts(db: Annotated[Session, Depends(get_db)]) -> list[PostOut]:
    """All posts, newest first, with authors and comments."""
    try:
        posts = blog.list_posts(db)
    except SQLAlchemyError as e:
        raise _server_error("fetching posts", e) from e
    return [PostOut.from_post(p) for p in posts]


@router.post("", response_model=PostOut)
def create_post(
    body: PostCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostOut:
    """Create a post owned by the signed-in user. The excerpt is derived from the content."""
    try:
        post = blog.create_post(
            db,
            current_user,
            title=body.title,
            content=body.content,
            image=body.image,
            tags=body.tags,
        )
    except SQLAlchemyError as e:
        raise _server_error("creating post", e) from e
    return PostOut.from_post(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Delete a post. Only its author or an admin may do this."""
    logger.info("Attempting to delete blog post %s", post_id)
    try:
        blog.delete_post(db, post_id, current_user)
    except blog.PostNotFoundError as e:
        raise _not_found(e) from e
    except ForbiddenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    except SQLAlchemyError as e:
        raise _server_error(f"deleting post {post_id}", e, "Error deleting blog post") from e
    return MessageResponse(message="Post deleted successfully")


@router.get("/user/{user_id}", response_model=list[PostOut])
def list_user_posts(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[PostOut]:
    """Posts by one author, newest first."""
    try:
        posts = blog.list_user_posts(db, user_id)
    except SQLAlchemyError as e:
        raise _server_error("fetching user posts", e) from e
    return [PostOut.from_post(p) for p in posts]


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: int, db: Annotated[Session, Depends(get_db)]) -> PostOut:
    try:
        post = blog.get_post(db, post_id)
    except blog.PostNotFoundError as e:
        raise _not_found(e) from e
    except SQLAlchemyError as e:
        raise _server_error("fetching post", e) from e
    return PostOut.from_post(post)


@router.post("/{post_id}/like", response_model=PostOut)
def like_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostOut:
    """Toggle the signed-in user's like on a post."""
    try:
        post = blog.toggle_like(db, post_id, current_user)
    except blog.PostNotFoundError as e:
        raise _not_found(e) from e
    except SQLAlchemyError as e:
        raise _server_error("liking post", e) from e
    return PostOut.from_post(post)


@router.post("/{post_id}/comment", response_model=PostOut)
def comment_on_post(
    post_id: int,
    body: CommentCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostOut:
    try:
        post = blog.add_comment(db, post_id, current_user, body.comment)
    except blog.PostNotFoundError as e:
        raise _not_found(e) from e
    except SQLAlchemyError as e:
        raise _server_error("adding comment", e) from e
    return PostOut.from_post(post)
