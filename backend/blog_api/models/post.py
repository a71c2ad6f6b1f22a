"""
Blog API Backend: BlogPost SQLAlchemy Model
============================================

What:  ORM model representing the `blog_posts` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by PostService for CRUD operations and by the integration tests
       to seed and inspect the store directly.

Table Design:
    - id: UUID generated in Python (uuid4), portable across PostgreSQL and SQLite
    - title / content: TEXT, required
    - author: JSON sub-document {"firstName": ..., "lastName": ...}
    - created: timestamp with time zone, defaults to insert time (UTC)

    Index on created DESC backs the list endpoint's newest-first ordering.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict

from sqlalchemy import JSON, DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from blog_api.database import Base


class BlogPost(Base):
    """
    A single blog post document.

    Lifecycle:
        1. Created by POST /posts (id and, if absent, created are assigned here)
        2. Mutated in place by PUT /posts/{id}; only supplied fields change
        3. Hard-deleted by DELETE /posts/{id}

    The `author` column always holds both name parts. The display string
    returned over HTTP is derived by `author_name` and never stored.
    """

    __tablename__ = "blog_posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    # Stored as {"firstName": str, "lastName": str}
    author: Mapped[Dict[str, str]] = mapped_column(JSON, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_blog_posts_created", created.desc()),
    )

    @property
    def author_name(self) -> str:
        """Display form of the author: "firstName lastName"."""
        author = self.author or {}
        return f"{author.get('firstName', '')} {author.get('lastName', '')}"

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, title='{self.title}', created='{self.created}')>"
