"""
Blog API Backend — Blog Service (Persistence Adapter)
======================================================

What:  CRUD operations over the `posts` table.
How:   Each operation opens one session from the injected Database, runs a
       single statement, and converts ORM rows into BlogOut responses.
Who:   Called by the /blogs route handlers through `get_blog_service`.

Contract:
    create(fields)           → BlogOut
    list_all()               → list[BlogOut], newest first
    find_by_id(id)           → BlogOut | None
    update_by_id(id, fields) → BlogOut | None (post-update record)
    delete_by_id(id)         → BlogOut | None (pre-deletion snapshot)

    Ids passed in must already satisfy the identifier format; the routes
    check that before calling. Any unexpected store failure is raised as
    DatabaseError with the underlying message.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, select

from blog_api.database import Database
from blog_api.exceptions import BlogApiError, DatabaseError
from blog_api.models.blog import Blog, new_blog_id
from blog_api.schemas.blog import BlogFields, BlogOut

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_blog_out(blog: Blog) -> BlogOut:
    return BlogOut(
        id=blog.id,
        title=blog.title,
        body=blog.body,
        author=blog.author,
        created_at=blog.created_at,
        updated_at=blog.updated_at,
    )


class BlogService:
    """
    Persistence adapter for blog posts.

    Stateless apart from the Database it wraps; one instance is shared by
    all requests.
    """

    def __init__(self, database: Database):
        self.database = database

    async def create(self, fields: BlogFields) -> BlogOut:
        """
        Insert a new post with a fresh id; created_at and updated_at are
        set to the same instant.
        """
        now = _utcnow()
        try:
            blog = Blog(
                id=new_blog_id(),
                title=fields.title,
                body=fields.body,
                author=fields.author,
                created_at=now,
                updated_at=now,
            )
            async with self.database.session() as session:
                session.add(blog)
        except Exception as e:
            raise self._store_error("creating blog", e) from e

        logger.info("Blog %s created", blog.id)
        return to_blog_out(blog)

    async def list_all(self) -> List[BlogOut]:
        """Every post, ordered by created_at descending. No pagination."""
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(Blog).order_by(desc(Blog.created_at))
                )
                blogs = list(result.scalars().all())
        except Exception as e:
            raise self._store_error("listing blogs", e) from e

        return [to_blog_out(blog) for blog in blogs]

    async def find_by_id(self, blog_id: str) -> Optional[BlogOut]:
        try:
            async with self.database.session() as session:
                blog = await session.get(Blog, blog_id)
        except Exception as e:
            raise self._store_error("fetching blog", e, blog_id) from e

        return to_blog_out(blog) if blog is not None else None

    async def update_by_id(self, blog_id: str, fields: BlogFields) -> Optional[BlogOut]:
        """
        Replace title, body and author on the matching post and refresh
        updated_at. Returns None when no post has this id.
        """
        try:
            async with self.database.session() as session:
                blog = await session.get(Blog, blog_id)
                if blog is None:
                    return None
                blog.title = fields.title
                blog.body = fields.body
                blog.author = fields.author
                blog.updated_at = _utcnow()
        except Exception as e:
            raise self._store_error("updating blog", e, blog_id) from e

        logger.info("Blog %s updated", blog_id)
        return to_blog_out(blog)

    async def delete_by_id(self, blog_id: str) -> Optional[BlogOut]:
        """Remove the matching post and return what it looked like before."""
        try:
            async with self.database.session() as session:
                blog = await session.get(Blog, blog_id)
                if blog is None:
                    return None
                snapshot = to_blog_out(blog)
                await session.delete(blog)
        except Exception as e:
            raise self._store_error("deleting blog", e, blog_id) from e

        logger.info("Blog %s deleted", blog_id)
        return snapshot

    @staticmethod
    def _store_error(action: str, error: Exception, blog_id: Optional[str] = None) -> BlogApiError:
        if isinstance(error, BlogApiError):
            return error
        logger.error("Error %s: %s", action, str(error), exc_info=True)
        context = {"error_type": type(error).__name__}
        if blog_id:
            context["blog_id"] = blog_id
        return DatabaseError(message=str(error), context=context)
