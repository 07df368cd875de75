# src/knit_server/api/v1/endpoints/posts.py
"""Post and comment endpoints for the Knit API."""

import asyncio

from fastapi import APIRouter, HTTPException, status

from knit_server.api.v1.dependencies import CurrentUserDep, GatewayDep
from knit_server.errors import ConflictError, NotFoundError
from knit_server.schemas.comment import CommentCreate, CommentLikes, CommentResponse
from knit_server.schemas.post import LikeState, PostPage

router = APIRouter(prefix="/posts", tags=["posts"])
comments_router = APIRouter(prefix="/comments", tags=["comments"])


def _post_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Post not found",
    )


@router.get("/{post_id}", response_model=PostPage)
async def get_post(post_id: str, gateway: GatewayDep) -> PostPage:
    """Get a post with its comment thread.

    Args:
        post_id: ID of the post to retrieve
        gateway: Data access gateway

    Returns:
        The post and its comments, oldest comment first

    Raises:
        HTTPException: If the post does not exist
    """
    post, comments = await asyncio.gather(
        gateway.get_post(post_id),
        gateway.list_comments(post_id=post_id),
    )
    if post is None:
        raise _post_not_found()
    return PostPage(post=post, comments=comments)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_post(
    post_id: str,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> CommentResponse:
    """Reply to a post."""
    try:
        return await gateway.add_comment(
            author_id=current_user.id,
            content=comment_data.content,
            post_id=post_id,
        )
    except NotFoundError as exc:
        raise _post_not_found() from exc


@router.post("/{post_id}/like", response_model=LikeState)
async def toggle_post_like(
    post_id: str,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> LikeState:
    """Like a post, or remove the caller's like if already given.

    The response carries the recounted number of likes.
    """
    try:
        state = await gateway.toggle_post_like(post_id, current_user.id)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if state is None:
        raise _post_not_found()
    return state


@comments_router.post("/{comment_id}/like", response_model=CommentLikes)
async def like_comment(
    comment_id: str,
    _current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> CommentLikes:
    """Add a like to a comment."""
    likes = await gateway.like_comment(comment_id)
    if likes is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )
    return CommentLikes(comment_id=comment_id, likes=likes)
