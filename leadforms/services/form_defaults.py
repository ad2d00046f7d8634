from __future__ import annotations

from typing import Sequence

from leadforms.schemas.forms import FieldValue
from leadforms.services.field_types import DataType
from leadforms.services.form_fields import ResolvedField
from leadforms.services.form_profiles import DYNAMIC_PROFILE, FormProfile


def default_value(field_item: ResolvedField, profile: FormProfile = DYNAMIC_PROFILE) -> FieldValue:
    data_type = field_item.data_type
    if data_type == DataType.EXTENSIBLE_LIST:
        return [""]
    if data_type == DataType.ARRAY:
        return [""] if profile.array_defaults_to_blank_row else []
    if data_type == DataType.CHECKBOX:
        return "false"
    return ""


def default_values(fields: Sequence[ResolvedField], profile: FormProfile = DYNAMIC_PROFILE) -> dict[str, FieldValue]:
    """Fresh initial values, one per field; list values are never shared between calls."""
    return {item.name: default_value(item, profile) for item in fields}
