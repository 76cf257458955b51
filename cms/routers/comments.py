import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from cms import dependencies as deps
from cms.exceptions import CommentNotFoundError, InvalidRequestError
from cms.schemas.blog import OperationResult
from cms.schemas.community import Comment, CommentCreate, CommentCreated
from cms.services.comments_service import CommentsService

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.get("/comments", response_model=List[Comment])
def list_comments(
    post_slug: str = Query(..., alias="postSlug"),
    service: CommentsService = Depends(deps.get_comments_service),
):
    """Approved comments for a post."""
    try:
        return service.list_public(post_slug)
    except Exception as e:
        logger.error(f"Error fetching comments for {post_slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch comments")


@router.post("/comments", response_model=CommentCreated, status_code=201)
def create_comment(
    body: CommentCreate,
    service: CommentsService = Depends(deps.get_comments_service),
):
    try:
        return service.submit(body)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating comment: {e}")
        raise HTTPException(status_code=500, detail="Failed to create comment")


@admin_router.get("/comments", response_model=List[Comment])
def list_comments_for_moderation(
    status: str = Query("all"),
    service: CommentsService = Depends(deps.get_comments_service),
):
    try:
        return service.list_for_moderation(status)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching comments: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch comments")


@admin_router.post("/comments/{comment_id}/approve", response_model=Comment)
def approve_comment(
    comment_id: str,
    service: CommentsService = Depends(deps.get_comments_service),
):
    try:
        return service.approve(comment_id)
    except CommentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error approving comment {comment_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to approve comment")


@admin_router.delete("/comments/{comment_id}", response_model=OperationResult)
def delete_comment(
    comment_id: str,
    service: CommentsService = Depends(deps.get_comments_service),
):
    try:
        service.delete(comment_id)
        return OperationResult()
    except CommentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting comment {comment_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete comment")
