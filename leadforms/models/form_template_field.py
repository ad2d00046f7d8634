import uuid

from sqlalchemy import Boolean, ForeignKey, JSON, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from leadforms.db.session import Base
from leadforms.models.common import UUIDMixin, CreatedAtMixin


class FormTemplateField(Base, UUIDMixin, CreatedAtMixin):
    __tablename__ = "form_template_fields"

    form_template_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("form_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # No FK: an assignment may outlive its library entry and is skipped as orphaned.
    field_library_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[str] = mapped_column(String(10), default="0", nullable=False)
    custom_validation: Mapped[dict | None] = mapped_column(JSON, nullable=True, default=dict)
    custom_label: Mapped[str | None] = mapped_column(String(255), nullable=True)
    placeholder: Mapped[str | None] = mapped_column(String(255), nullable=True)
    section: Mapped[str | None] = mapped_column(String(100), nullable=True)
