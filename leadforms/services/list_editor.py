from __future__ import annotations

from typing import TYPE_CHECKING

from leadforms.services.field_types import LIST_TYPES

if TYPE_CHECKING:
    from leadforms.services.form_session import FormSession


class ListRowEditor:
    """Add/remove/update rows of a list field.

    The session's ``values`` stay the only source of truth: every edit writes the
    whole list back through ``FormSession.set_value`` and rows are always read
    from the session.
    """

    def __init__(self, session: "FormSession", field_name: str):
        field_item = session.field(field_name)
        if field_item.data_type not in LIST_TYPES:
            raise ValueError(f"Field {field_name!r} is not a list field")
        validation = field_item.validation
        self.session = session
        self.field_name = field_name
        self.min_items = validation.min_items or 1
        self.max_items = validation.max_items or None

    @property
    def rows(self) -> list[str]:
        value = self.session.values.get(self.field_name)
        return list(value) if isinstance(value, list) else []

    @property
    def can_add(self) -> bool:
        return self.max_items is None or len(self.rows) < self.max_items

    @property
    def can_remove(self) -> bool:
        return len(self.rows) > self.min_items

    def add_row(self) -> bool:
        if not self.can_add:
            return False
        return self.session.set_value(self.field_name, self.rows + [""])

    def remove_row(self, index: int) -> bool:
        rows = self.rows
        if not self.can_remove or not 0 <= index < len(rows):
            return False
        del rows[index]
        return self.session.set_value(self.field_name, rows)

    def update_row(self, index: int, value: str) -> bool:
        rows = self.rows
        if not 0 <= index < len(rows):
            return False
        rows[index] = str(value or "")
        return self.session.set_value(self.field_name, rows)
