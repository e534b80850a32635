"""
Initial schema: projects, daily data records and comparison analyses.

Revision ID: 001
Revises: None
Create Date: 2026-10-18

CHANGELOG:
- 2026-10-18: Initial creation
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# Revision identifiers used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create solar_analysis_projects, solar_data_records, comparison_analyses."""
    op.create_table(
        "solar_analysis_projects",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Double(), nullable=False),
        sa.Column("longitude", sa.Double(), nullable=False),
        sa.Column("elevation", sa.Double(), nullable=True),
        sa.Column("timezone", sa.Text(), nullable=True),
        sa.Column(
            "panel_area", sa.Double(), nullable=False, server_default=sa.text("10")
        ),
        sa.Column(
            "system_efficiency",
            sa.Double(),
            nullable=False,
            server_default=sa.text("0.22"),
        ),
        sa.Column(
            "mission_duration",
            sa.Double(),
            nullable=False,
            server_default=sa.text("14"),
        ),
        sa.Column("solar_data", sa.JSON(), nullable=True),
        sa.Column("calculations", sa.JSON(), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "solar_data_records",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(64),
            sa.ForeignKey("solar_analysis_projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("irradiance", sa.Double(), nullable=False),
        sa.Column("temperature", sa.Double(), nullable=False),
        sa.Column("cloud_cover", sa.Double(), nullable=True),
        sa.Column("humidity", sa.Double(), nullable=True),
        sa.Column("wind_speed", sa.Double(), nullable=True),
        sa.Column("efficiency", sa.Double(), nullable=True),
        sa.Column("energy_output", sa.Double(), nullable=True),
        sa.Column(
            "data_source",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'NASA_POWER'"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_solar_data_records_project_id", "solar_data_records", ["project_id"]
    )

    op.create_table(
        "comparison_analyses",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("project_ids", sa.JSON(), nullable=False),
        sa.Column("analysis_type", sa.Text(), nullable=False),
        sa.Column("results", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    """Drop all AstroSolar tables."""
    op.drop_table("comparison_analyses")
    op.drop_index("ix_solar_data_records_project_id", table_name="solar_data_records")
    op.drop_table("solar_data_records")
    op.drop_table("solar_analysis_projects")
