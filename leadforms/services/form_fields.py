from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from pydantic import ValidationError

from leadforms.schemas.forms import FieldAssignment, FieldLibraryEntry, FieldValidation
from leadforms.services.field_types import DataType

_LOG = logging.getLogger("leadforms.forms")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class ResolvedField:
    assignment: FieldAssignment
    entry: FieldLibraryEntry
    data_type: DataType
    order: int

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def is_required(self) -> bool:
        return bool(self.assignment.is_required)

    @property
    def validation(self) -> FieldValidation:
        return self.entry.default_validation.merged_with(self.assignment.custom_validation)


def parse_order(raw: Any) -> int:
    match = _LEADING_INT_RE.match(str(raw or ""))
    if not match:
        return 0
    return int(match.group(1))


def _coerce_assignment(raw: Any) -> FieldAssignment:
    if isinstance(raw, FieldAssignment):
        return raw
    return FieldAssignment.model_validate(raw)


def resolve_field_assignments(raw_items: Iterable[Any] | None) -> tuple[ResolvedField, ...]:
    """Drop malformed assignments and sort the rest by display order.

    Assignments without a library entry, with an empty entry name, failing to
    parse, or repeating a name already taken are skipped with a warning. The sort
    is stable, so equal orders keep their input order.
    """
    resolved: list[ResolvedField] = []
    seen_names: set[str] = set()
    for index, raw in enumerate(raw_items or []):
        try:
            assignment = _coerce_assignment(raw)
        except ValidationError as exc:
            _LOG.warning("Skipping malformed field assignment index=%s errors=%s", index, exc.error_count())
            continue
        entry = assignment.field_library
        if entry is None:
            _LOG.warning(
                "Skipping field assignment without library entry index=%s assignment_id=%s field_library_id=%s",
                index,
                assignment.id,
                assignment.field_library_id,
            )
            continue
        name = str(entry.name or "").strip()
        if not name:
            _LOG.warning("Skipping field assignment with empty field name index=%s assignment_id=%s", index, assignment.id)
            continue
        if name in seen_names:
            _LOG.warning("Skipping duplicate field name=%s index=%s assignment_id=%s", name, index, assignment.id)
            continue
        seen_names.add(name)
        if entry.name != name:
            entry = entry.model_copy(update={"name": name})
        resolved.append(
            ResolvedField(
                assignment=assignment,
                entry=entry,
                data_type=DataType.parse(entry.data_type),
                order=parse_order(assignment.order),
            )
        )
    resolved.sort(key=lambda item: item.order)
    return tuple(resolved)
