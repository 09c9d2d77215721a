from __future__ import annotations
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("region", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("contact_id", sa.String(length=255), nullable=False),
        sa.Column("quiz_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column("quiz_time_taken", sa.Float(), nullable=False, server_default="0"),
        sa.Column("quiz_comment", sa.Text(), nullable=True),
        sa.Column("snap_score", sa.Float(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("video_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("file_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_participants_contact_id", "participants", ["contact_id"], unique=True)
    # leaderboard scans
    op.create_index("ix_participants_snap_score", "participants", ["snap_score"])
    op.create_index("ix_participants_quiz_rank", "participants", ["quiz_score", "quiz_time_taken"])

def downgrade() -> None:
    op.drop_index("ix_participants_quiz_rank", table_name="participants")
    op.drop_index("ix_participants_snap_score", table_name="participants")
    op.drop_index("ix_participants_contact_id", table_name="participants")
    op.drop_table("participants")
