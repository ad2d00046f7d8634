from sqlalchemy import String, Boolean, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from leadforms.db.session import Base
from leadforms.models.common import UUIDMixin, TimestampMixin


class FormTemplate(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "form_templates"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), default="general", nullable=False)
    card_type: Mapped[str] = mapped_column(String(50), default="form", nullable=False)
    identifier_field: Mapped[str] = mapped_column(String(100), default="email", nullable=False)
    config: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
