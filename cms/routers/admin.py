import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from cms import dependencies as deps
from cms.schemas.community import Overview
from cms.services.comments_service import CommentsService
from cms.services.posts_service import PostsService
from cms.services.subscribers_service import SubscribersService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/overview", response_model=Overview)
async def overview(
    posts_service: PostsService = Depends(deps.get_posts_service),
    comments_service: CommentsService = Depends(deps.get_comments_service),
    subscribers_service: SubscribersService = Depends(deps.get_subscribers_service),
):
    """Dashboard counters."""
    try:
        posts = await posts_service.list_posts()
        # pycouchdb is blocking
        comments, pending = await run_in_threadpool(comments_service.counts)
        subscribers = await run_in_threadpool(subscribers_service.count)
    except Exception as e:
        logger.error(f"Error building dashboard overview: {e}")
        raise HTTPException(status_code=500, detail="Failed to load overview")

    return Overview(
        posts=len(posts),
        comments=comments,
        pendingComments=pending,
        subscribers=subscribers,
    )
