from __future__ import annotations

from leadforms.schemas.forms import FieldDescriptor, FieldValue
from leadforms.services.field_types import LIST_TYPES, DataType, input_type_for
from leadforms.services.form_fields import ResolvedField
from leadforms.services.localization import DEFAULT_LANGUAGE, localize_field


def build_descriptor(
    field_item: ResolvedField,
    *,
    language: str = DEFAULT_LANGUAGE,
    value: FieldValue | None = None,
    error: str | None = None,
) -> FieldDescriptor:
    localized = localize_field(field_item, language)
    validation = field_item.validation
    is_list = field_item.data_type in LIST_TYPES
    # Arrays with options render as multi-select; the rest of the list types as editable rows.
    row_list = is_list and not (field_item.data_type == DataType.ARRAY and localized.options)
    if value is None:
        value = [] if is_list else ""
    return FieldDescriptor(
        field_name=field_item.name,
        data_type=field_item.entry.data_type,
        input_type=input_type_for(field_item.data_type, has_options=bool(localized.options)),
        resolved_label=localized.label,
        resolved_placeholder=localized.placeholder,
        resolved_description=localized.description,
        resolved_options=localized.options,
        is_required=field_item.is_required,
        current_value=value,
        current_error=error,
        order=field_item.order,
        section=field_item.assignment.section,
        item_label=localized.item_label if row_list else None,
        item_placeholder=localized.item_placeholder if row_list else None,
        min_items=(validation.min_items or 1) if row_list else None,
        max_items=validation.max_items if row_list else None,
    )
