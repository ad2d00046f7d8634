from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping

CUSTOM_FORM_TYPE = "custom-form"
STANDARD_LEAD_FIELDS = ("firstName", "lastName", "email", "phone")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value)
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def build_lead_payload(
    values: Mapping[str, Any],
    *,
    form_template_id: str,
    site_id: str,
    form_type: str = CUSTOM_FORM_TYPE,
) -> dict[str, Any]:
    """Lead payload for the storage collaborator.

    Standard contact fields are written twice: inside ``formData`` and as
    top-level keys, since leads are indexed by those columns.
    """
    form_data = deepcopy(dict(values or {}))
    payload: dict[str, Any] = {
        "formType": form_type,
        "formTemplateId": str(form_template_id),
        "siteId": str(site_id),
        "formData": form_data,
    }
    for key in STANDARD_LEAD_FIELDS:
        value = form_data.get(key)
        if _is_present(value):
            payload[key] = value
    return payload
