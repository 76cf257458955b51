import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from cms import dependencies as deps
from cms.exceptions import PostConflictError, PostNotFoundError, PostValidationError
from cms.schemas.blog import CreatePostResult, OperationResult, Post, PostInput
from cms.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter()


@router.get("/posts", response_model=List[Post])
async def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get all posts, newest first."""
    try:
        return await service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch posts")


@router.get("/posts/{slug}", response_model=Post)
async def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        post = await service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch post")


@admin_router.post("/posts", response_model=CreatePostResult, status_code=201)
async def create_post(
    body: PostInput,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return await service.create_post(body)
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PostConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating post: {e}")
        raise HTTPException(status_code=500, detail="Failed to create post")


@admin_router.put("/posts/{slug}", response_model=OperationResult)
async def update_post(
    slug: str,
    body: PostInput,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return await service.update_post(slug, body)
    except PostValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PostNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update post")


@admin_router.delete("/posts/{slug}", response_model=OperationResult)
async def delete_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return await service.delete_post(slug)
    except PostNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete post")
