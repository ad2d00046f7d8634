"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "field_library",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("data_type", sa.String(length=50), nullable=False),
        sa.Column("default_placeholder", sa.String(length=255), nullable=True),
        sa.Column("default_validation", sa.JSON(), nullable=True),
        sa.Column("translations", sa.JSON(), nullable=True),
        sa.Column("enum_list", sa.JSON(), nullable=True),
        sa.Column("is_system_field", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("category", sa.String(length=50), nullable=False, server_default="general"),
    )

    op.create_table(
        "form_templates",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=False, server_default="general"),
        sa.Column("card_type", sa.String(length=50), nullable=False, server_default="form"),
        sa.Column("identifier_field", sa.String(length=100), nullable=False, server_default="email"),
        sa.Column("config", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )

    op.create_table(
        "form_template_fields",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "form_template_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("form_templates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("field_library_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("order", sa.String(length=10), nullable=False, server_default="0"),
        sa.Column("custom_validation", sa.JSON(), nullable=True),
        sa.Column("custom_label", sa.String(length=255), nullable=True),
        sa.Column("placeholder", sa.String(length=255), nullable=True),
        sa.Column("section", sa.String(length=100), nullable=True),
    )
    op.create_index("ix_form_template_fields_form_template_id", "form_template_fields", ["form_template_id"])
    op.create_index("ix_form_template_fields_field_library_id", "form_template_fields", ["field_library_id"])

    op.create_table(
        "site_leads",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("site_id", sa.String(length=50), nullable=False),
        sa.Column("form_template_id", sa.String(length=64), nullable=True),
        sa.Column("form_type", sa.String(length=50), nullable=False, server_default="contact"),
        sa.Column("identifier", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("form_data", sa.JSON(), nullable=False),
    )
    op.create_index("ix_site_leads_site_id", "site_leads", ["site_id"])
    op.create_index("ix_site_leads_form_template_id", "site_leads", ["form_template_id"])
    op.create_index("ix_site_leads_identifier", "site_leads", ["identifier"])

def downgrade():
    op.drop_index("ix_site_leads_identifier", table_name="site_leads")
    op.drop_index("ix_site_leads_form_template_id", table_name="site_leads")
    op.drop_index("ix_site_leads_site_id", table_name="site_leads")
    op.drop_table("site_leads")
    op.drop_index("ix_form_template_fields_field_library_id", table_name="form_template_fields")
    op.drop_index("ix_form_template_fields_form_template_id", table_name="form_template_fields")
    op.drop_table("form_template_fields")
    op.drop_table("form_templates")
    op.drop_table("field_library")
