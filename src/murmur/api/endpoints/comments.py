"""Comment endpoints for the Murmur API."""

import logging

from fastapi import APIRouter

from murmur.api.dependencies import (
    CommentRepoDep,
    CurrentIdentityDep,
    CurrentUserDep,
    PostRepoDep,
)
from murmur.core.errors import ApiError
from murmur.schemas.comment import CommentCreate, CommentResponse
from murmur.schemas.common import Message, TextUpdate
from murmur.services.ownership import load_owned, require_found

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"])

POST = "Post"
COMMENT = "Comment"


@router.post("/{post_id}", response_model=CommentResponse)
def create_comment(
    post_id: str,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
    comments: CommentRepoDep,
) -> CommentResponse:
    """Comment on an existing post.

    The post is only loaded, not authorized: any authenticated user may
    comment on any post.
    """
    post = require_found(posts.get_by_id(post_id), POST)
    comment = comments.create(post_id=post.id, owner_id=current_user.id, text=comment_data.text)
    logger.info("User %s commented %s on post %s", current_user.id, comment.id, post.id)
    return CommentResponse.model_validate(comment)


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
def list_comments(
    post_id: str,
    _: CurrentIdentityDep,
    posts: PostRepoDep,
    comments: CommentRepoDep,
) -> list[CommentResponse]:
    """Return the comments referencing a post.

    Comments outlive their post, so a missing post is only reported when
    nothing references it either.
    """
    found = comments.list_for_post(post_id)
    if not found and posts.get_by_id(post_id) is None:
        raise ApiError.not_found(POST)
    return [CommentResponse.model_validate(comment) for comment in found]


@router.put("/{post_id}/{comment_id}", response_model=CommentResponse)
def update_comment(
    post_id: str,
    comment_id: str,
    update: TextUpdate,
    identity: CurrentIdentityDep,
    posts: PostRepoDep,
    comments: CommentRepoDep,
) -> CommentResponse:
    """Replace the text of a comment owned by the caller."""
    require_found(posts.get_by_id(post_id), POST)
    comment = load_owned(comments.get_by_id(comment_id), identity.id, COMMENT)
    comment = comments.update_text(comment, update.text)
    return CommentResponse.model_validate(comment)


@router.delete("/{post_id}/{comment_id}", response_model=Message)
def delete_comment(
    post_id: str,
    comment_id: str,
    identity: CurrentIdentityDep,
    comments: CommentRepoDep,
) -> Message:
    """Delete a comment owned by the caller.

    Only the comment is loaded, so comments left behind by a deleted post can
    still be removed by their author.
    """
    comment = load_owned(comments.get_by_id(comment_id), identity.id, COMMENT)
    comments.delete(comment)
    logger.info("User %s removed comment %s from post %s", identity.id, comment_id, post_id)
    return Message(msg="Comment removed")
