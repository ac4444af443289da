"""
Blog API Backend — Blog SQLAlchemy Model
=========================================

What:  ORM model for the `posts` table, plus the blog identifier format.
Who:   Used by BlogService for CRUD operations and by Database.connect()
       to create the table.

Identifier format:
    Ids are 24 lowercase hex characters (12 random bytes), generated in
    Python at insert time. `is_valid_blog_id` checks the format only; it
    says nothing about whether a record exists.

Index on created_at:
    Listing is always newest-first, so created_at carries an index.
"""

import re
import secrets
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from blog_api.database import Base

BLOG_ID_LENGTH = 24
BLOG_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

DEFAULT_AUTHOR = "Anonymous"


def new_blog_id() -> str:
    """Generate a fresh blog id (24 lowercase hex chars)."""
    return secrets.token_hex(BLOG_ID_LENGTH // 2)


def is_valid_blog_id(value: str) -> bool:
    return isinstance(value, str) and BLOG_ID_PATTERN.fullmatch(value) is not None


class Blog(Base):
    """
    A single blog post.

    Lifecycle:
        1. Created by POST /blogs (created_at == updated_at)
        2. Fully replaced by PUT /blogs/{id} (updated_at refreshed)
        3. Permanently removed by DELETE /blogs/{id}
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        String(BLOG_ID_LENGTH),
        primary_key=True,
        default=new_blog_id,
    )

    # Stored trimmed; never empty
    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Stored verbatim; never empty
    body: Mapped[str] = mapped_column(Text, nullable=False)

    # Free text, no length limit
    author: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_AUTHOR,
    )

    # Always written as UTC by BlogService
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
    )

    @validates("title", "body")
    def _reject_empty(self, key: str, value: str) -> str:
        if not value or (key == "title" and not value.strip()):
            raise ValueError(f"Blog {key} must not be empty")
        return value

    def __repr__(self) -> str:
        return f"<Blog(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
