"""
Blog API Backend: Post Service (Business Logic)
================================================

What:  The single place where blog posts are read from and written to the store.
How:   Each public method performs one store operation on the request's
       AsyncSession and returns response models. Commit/rollback is owned by
       the get_db_session dependency.
Who:   Called by the /posts route handlers; unit-tested with mocked sessions.

Error translation:
    None from a lookup        -> NotFoundError (404)
    Connection-level failures -> StoreUnavailableError (503)
    Other SQLAlchemy errors   -> DatabaseError (500)
    Our own exceptions propagate unchanged.

The service is stateless; a module-level singleton is shared by all requests.
"""

import logging
from typing import List, NoReturn
from uuid import UUID

from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.exceptions import (
    DatabaseError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from blog_api.models.post import BlogPost
from blog_api.schemas.post import BlogPostCreate, BlogPostResponse, BlogPostUpdate

logger = logging.getLogger(__name__)

# Errors that mean the store itself could not be reached
_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError)


def _raise_store_error(exc: Exception, action: str, **context: str) -> NoReturn:
    """Log a driver failure and re-raise it as the matching application error."""
    context["error_type"] = type(exc).__name__
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        logger.error("Store unavailable while trying to %s: %s", action, exc)
        raise StoreUnavailableError(context=context) from exc
    logger.error("Database error while trying to %s: %s", action, exc, exc_info=True)
    raise DatabaseError(
        message=f"Could not {action}. Please try again.",
        context=context,
    ) from exc


class PostService:
    """
    CRUD operations for the posts resource.

    Responsibilities:
        - list_posts():  every post, newest first
        - count_posts(): total stored posts
        - get_post():    one post or NotFoundError
        - create_post(): insert and return the representation with its new id
        - update_post(): apply only the supplied fields
        - delete_post(): idempotent hard delete
    """

    async def list_posts(self, db: AsyncSession) -> List[BlogPostResponse]:
        """
        Return all posts as representations.

        No pagination: the result size equals count_posts() at query time.
        """
        try:
            result = await db.execute(select(BlogPost).order_by(desc(BlogPost.created)))
            posts = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "list posts")

        return [BlogPostResponse.from_model(post) for post in posts]

    async def count_posts(self, db: AsyncSession) -> int:
        try:
            result = await db.execute(select(func.count(BlogPost.id)))
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "count posts")
        return result.scalar() or 0

    async def _load(self, db: AsyncSession, post_id: UUID) -> BlogPost:
        try:
            result = await db.execute(select(BlogPost).where(BlogPost.id == post_id))
            post = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "retrieve the post", post_id=str(post_id))

        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post

    async def get_post(self, db: AsyncSession, post_id: UUID) -> BlogPostResponse:
        """
        Retrieve a single post by ID.

        Raises:
            NotFoundError: no post with this id (-> 404)
            DatabaseError: query execution failed (-> 500/503)
        """
        post = await self._load(db, post_id)
        return BlogPostResponse.from_model(post)

    async def create_post(self, db: AsyncSession, data: BlogPostCreate) -> BlogPostResponse:
        """
        Persist a new post.

        The id is generated on insert; `created` falls back to the column
        default (now, UTC) when the client did not send one.
        """
        fields = {
            "title": data.title,
            "author": data.author.to_document(),
            "content": data.content,
        }
        if data.created is not None:
            fields["created"] = data.created

        post = BlogPost(**fields)
        try:
            db.add(post)
            await db.flush()  # assigns id and created without committing
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "create the post")

        logger.info("Post created: %s", post.id)
        return BlogPostResponse.from_model(post)

    async def update_post(
        self,
        db: AsyncSession,
        post_id: UUID,
        data: BlogPostUpdate,
    ) -> BlogPostResponse:
        """
        Apply the supplied fields of `data` to an existing post.

        Fields absent from the request body are left untouched.

        Raises:
            ValidationError: body id present and different from the path id
            NotFoundError:   no post with this id
        """
        if data.id is not None and data.id != post_id:
            raise ValidationError(
                message="Request path id and request body id values must match",
                field="id",
                context={"path_id": str(post_id), "body_id": str(data.id)},
            )

        post = await self._load(db, post_id)
        changes = data.changes()
        for name, value in changes.items():
            setattr(post, name, value)

        try:
            await db.flush()
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "update the post", post_id=str(post_id))

        logger.info("Post %s updated: %s", post_id, sorted(changes) or "no fields")
        return BlogPostResponse.from_model(post)

    async def delete_post(self, db: AsyncSession, post_id: UUID) -> None:
        """
        Hard-delete a post. Deleting an id that does not exist is not an error.
        """
        try:
            result = await db.execute(delete(BlogPost).where(BlogPost.id == post_id))
        except (SQLAlchemyError, OSError) as e:
            _raise_store_error(e, "delete the post", post_id=str(post_id))

        if result.rowcount:
            logger.info("Post deleted: %s", post_id)
        else:
            logger.info("Delete of absent post %s ignored", post_id)


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
