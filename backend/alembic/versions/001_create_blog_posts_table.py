"""Create blog_posts table

Revision ID: 001
Revises: None
Create Date: 2026-10-16 00:00:00.000000+00:00

What:  Creates the `blog_posts` table; see blog_api/models/post.py.
Rollback: downgrade() drops the table (all posts are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        # {"firstName": ..., "lastName": ...}
        sa.Column("author", sa.JSON(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_blog_posts_created",
        "blog_posts",
        [sa.text("created DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_blog_posts_created", table_name="blog_posts")
    op.drop_table("blog_posts")
