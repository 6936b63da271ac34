"""Initial schema: flashcards.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "flashcards",
        sa.Column("card_id", sa.String(64), primary_key=True),
        sa.Column("card_type", sa.String(16), nullable=False, server_default="user"),
        sa.Column("law_id", sa.Integer, nullable=True),
        sa.Column("article_id", sa.String(32), nullable=False, server_default=""),
        sa.Column("front", sa.Text, nullable=False),
        sa.Column("back", sa.Text, nullable=False),
        sa.Column("source_text", sa.Text, nullable=True),
        sa.Column("interval", sa.Integer, nullable=False, server_default="0"),
        sa.Column("repetition", sa.Integer, nullable=False, server_default="0"),
        sa.Column("ease_factor", sa.Float, nullable=False, server_default="2.5"),
        sa.Column("next_review", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("last_reviewed", sa.BigInteger, nullable=True),
    )
    op.create_index("ix_flashcards_card_type", "flashcards", ["card_type"])
    op.create_index("ix_flashcards_law_id", "flashcards", ["law_id"])
    op.create_index("ix_flashcards_article_id", "flashcards", ["article_id"])
    op.create_index("ix_flashcards_next_review", "flashcards", ["next_review"])
    op.create_index("ix_flashcards_created_at", "flashcards", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_flashcards_created_at", table_name="flashcards")
    op.drop_index("ix_flashcards_next_review", table_name="flashcards")
    op.drop_index("ix_flashcards_article_id", table_name="flashcards")
    op.drop_index("ix_flashcards_law_id", table_name="flashcards")
    op.drop_index("ix_flashcards_card_type", table_name="flashcards")
    op.drop_table("flashcards")
