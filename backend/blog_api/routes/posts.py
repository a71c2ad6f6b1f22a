"""
Blog API Backend: Posts Route Handlers
=======================================

What:  HTTP surface of the blog-post resource.
How:   FastAPI validates path ids and JSON bodies, handlers delegate to
       PostService and set the status code.

Route table:
    GET    /posts        200  array of posts
    GET    /posts/{id}   200  one post             | 404
    POST   /posts        201  created post         | 400
    PUT    /posts/{id}   201  updated post         | 400, 404
    DELETE /posts/{id}   204  empty, even if absent or not a UUID
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db_session
from blog_api.schemas.post import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    ErrorResponse,
)
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get(
    "",
    response_model=List[BlogPostResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all blog posts",
)
async def list_posts(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[BlogPostResponse]:
    """Return every post, newest first. X-Total-Count carries the array length."""
    posts = await post_service.list_posts(db)
    response.headers["X-Total-Count"] = str(len(posts))
    return posts


@router.get(
    "/{post_id}",
    response_model=BlogPostResponse,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Get a single blog post",
)
async def get_post(
    post_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> BlogPostResponse:
    return await post_service.get_post(db, post_id)


@router.post(
    "",
    response_model=BlogPostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing or invalid field", "model": ErrorResponse}},
    summary="Create a blog post",
)
async def create_post(
    payload: BlogPostCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> BlogPostResponse:
    created = await post_service.create_post(db, payload)
    response.headers["Location"] = f"/posts/{created.id}"
    return created


@router.put(
    "/{post_id}",
    response_model=BlogPostResponse,
    # 201 rather than 200: existing clients assert on it
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid field or id mismatch", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Update the supplied fields of a blog post",
)
async def update_post(
    post_id: UUID,
    payload: BlogPostUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> BlogPostResponse:
    """
    Partial update: only title, content and author keys present in the body
    are applied. A body `id`, when sent, must equal the path id.
    """
    return await post_service.update_post(db, post_id, payload)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a blog post (idempotent)",
)
async def delete_post(
    post_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Always 204. An id that is not a UUID cannot name a stored post, so it is
    treated like any other absent id.
    """
    try:
        parsed_id = UUID(post_id)
    except ValueError:
        logger.info("Delete of malformed post id %r ignored", post_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    await post_service.delete_post(db, parsed_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
