"""Post-related endpoints for the Murmur API."""

import logging

from fastapi import APIRouter, status

from murmur.api.dependencies import (
    CommentRepoDep,
    CurrentIdentityDep,
    CurrentUserDep,
    PostRepoDep,
)
from murmur.core.errors import ApiError, ErrorKind, StoreError, StoreErrorKind
from murmur.schemas.comment import CommentCreate, CommentResponse
from murmur.schemas.common import Message, TextUpdate
from murmur.schemas.post import PostCreate, PostResponse
from murmur.services.ownership import load_owned, require_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

POST = "Post"
ALREADY_LIKED = "Post already liked"
NOT_LIKED = "Post has not yet been liked"


def _already_liked() -> ApiError:
    return ApiError(ErrorKind.VALIDATION, ALREADY_LIKED, errors=[{"msg": ALREADY_LIKED}])


@router.get("", response_model=list[PostResponse])
def list_posts(_: CurrentIdentityDep, posts: PostRepoDep) -> list[PostResponse]:
    """List every post, newest first."""
    return [PostResponse.model_validate(post) for post in posts.list_recent()]


@router.post("/create", response_model=PostResponse)
def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
) -> PostResponse:
    """Create a post owned by the caller.

    Args:
        post_data: Text plus optional display name and image path.
        current_user: Authenticated author.
        posts: Post repository.

    Returns:
        The stored post.
    """
    post = posts.create(
        owner_id=current_user.id,
        text=post_data.text,
        username=post_data.username,
        image=post_data.image,
    )
    logger.info("User %s created post %s", current_user.id, post.id)
    return PostResponse.model_validate(post)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, _: CurrentIdentityDep, posts: PostRepoDep) -> PostResponse:
    """Get a specific post by ID.

    Raises:
        ApiError: If the post does not exist or the id is malformed.
    """
    post = require_found(posts.get_by_id(post_id), POST)
    return PostResponse.model_validate(post)


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    update: TextUpdate,
    identity: CurrentIdentityDep,
    posts: PostRepoDep,
) -> PostResponse:
    """Replace the text of a post owned by the caller.

    Raises:
        ApiError: 404 if the post is missing, 401 if the caller is not its owner.
    """
    post = load_owned(posts.get_by_id(post_id), identity.id, POST)
    post = posts.update_text(post, update.text)
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", response_model=Message)
def delete_post(post_id: str, identity: CurrentIdentityDep, posts: PostRepoDep) -> Message:
    """Delete a post owned by the caller.

    Comments on the post are not removed.
    """
    post = load_owned(posts.get_by_id(post_id), identity.id, POST)
    posts.delete(post)
    logger.info("User %s deleted post %s", identity.id, post_id)
    return Message(msg="Post deleted")


@router.post("/{post_id}", response_model=CommentResponse)
def comment_on_post(
    post_id: str,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
    comments: CommentRepoDep,
) -> CommentResponse:
    """Comment on a post. Any authenticated user may comment on any post."""
    post = require_found(posts.get_by_id(post_id), POST)
    comment = comments.create(post_id=post.id, owner_id=current_user.id, text=comment_data.text)
    return CommentResponse.model_validate(comment)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_post_comments(
    post_id: str,
    _: CurrentIdentityDep,
    posts: PostRepoDep,
    comments: CommentRepoDep,
) -> list[CommentResponse]:
    """Return all comments of an existing post with their authors resolved."""
    post = require_found(posts.get_by_id(post_id), POST)
    return [CommentResponse.model_validate(comment) for comment in comments.list_for_post(post.id)]


@router.put("/{post_id}/like", response_model=list[str])
def like_post(post_id: str, identity: CurrentIdentityDep, posts: PostRepoDep) -> list[str]:
    """Add the caller to the post's likes and return the like list."""
    post = require_found(posts.get_by_id(post_id), POST)
    if identity.id in post.liked_by:
        raise _already_liked()
    try:
        post = posts.add_like(post, identity.id)
    except StoreError as err:
        # A concurrent like from the same user hits the composite key.
        if err.kind is not StoreErrorKind.CONFLICT:
            raise
        raise _already_liked() from err
    return [str(user_id) for user_id in post.liked_by]


@router.put("/{post_id}/unlike", response_model=list[str])
def unlike_post(post_id: str, identity: CurrentIdentityDep, posts: PostRepoDep) -> list[str]:
    """Remove the caller from the post's likes and return the like list."""
    post = require_found(posts.get_by_id(post_id), POST)
    if identity.id not in post.liked_by:
        raise ApiError(ErrorKind.VALIDATION, NOT_LIKED, errors=[{"msg": NOT_LIKED}])
    post = posts.remove_like(post, identity.id)
    return [str(user_id) for user_id in post.liked_by]
