from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column

from leadforms.db.session import Base
from leadforms.models.common import UUIDMixin, CreatedAtMixin


class SiteLead(Base, UUIDMixin, CreatedAtMixin):
    __tablename__ = "site_leads"

    site_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    form_template_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    form_type: Mapped[str] = mapped_column(String(50), default="contact", nullable=False)
    identifier: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    form_data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
