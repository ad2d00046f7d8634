from sqlalchemy import String, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column

from leadforms.db.session import Base
from leadforms.models.common import UUIDMixin, CreatedAtMixin


class FieldLibrary(Base, UUIDMixin, CreatedAtMixin):
    __tablename__ = "field_library"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    data_type: Mapped[str] = mapped_column(String(50), nullable=False)
    default_placeholder: Mapped[str | None] = mapped_column(String(255), nullable=True)
    default_validation: Mapped[dict | None] = mapped_column(JSON, nullable=True, default=dict)
    translations: Mapped[dict | None] = mapped_column(JSON, nullable=True, default=dict)
    enum_list: Mapped[list | None] = mapped_column(JSON, nullable=True)
    is_system_field: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    category: Mapped[str] = mapped_column(String(50), default="general", nullable=False)
