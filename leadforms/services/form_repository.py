from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.orm import Session

from leadforms.models.field_library import FieldLibrary
from leadforms.models.form_template import FormTemplate
from leadforms.models.form_template_field import FormTemplateField
from leadforms.models.site_lead import SiteLead


def field_library_row(row: FieldLibrary) -> dict[str, Any]:
    # Public shape: no category, isSystemField or createdAt.
    return {
        "id": str(row.id),
        "name": row.name,
        "label": row.label,
        "dataType": row.data_type,
        "defaultPlaceholder": row.default_placeholder,
        "defaultValidation": dict(row.default_validation or {}),
        "translations": dict(row.translations or {}),
        "enumList": list(row.enum_list) if row.enum_list is not None else None,
    }


def form_template_field_row(row: FormTemplateField, library: FieldLibrary | None) -> dict[str, Any]:
    return {
        "id": str(row.id),
        "formTemplateId": str(row.form_template_id),
        "fieldLibraryId": str(row.field_library_id),
        "isRequired": bool(row.is_required),
        "order": row.order,
        "customValidation": dict(row.custom_validation) if row.custom_validation else None,
        "customLabel": row.custom_label,
        "placeholder": row.placeholder,
        "section": row.section,
        "fieldLibrary": field_library_row(library) if library is not None else None,
    }


def get_form_template(db: Session, form_template_id: uuid.UUID) -> FormTemplate | None:
    return db.get(FormTemplate, form_template_id)


def list_form_template_fields(db: Session, form_template_id: uuid.UUID) -> list[dict[str, Any]]:
    rows = (
        db.query(FormTemplateField, FieldLibrary)
        .outerjoin(FieldLibrary, FieldLibrary.id == FormTemplateField.field_library_id)
        .filter(FormTemplateField.form_template_id == form_template_id)
        .order_by(FormTemplateField.created_at.asc(), FormTemplateField.id.asc())
        .all()
    )
    return [form_template_field_row(field_row, library) for field_row, library in rows]


def create_site_lead(
    db: Session,
    *,
    email: str,
    site_id: str,
    form_data: dict[str, Any],
    form_type: str | None = None,
    form_template_id: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
) -> SiteLead:
    row = SiteLead(
        site_id=site_id,
        form_template_id=form_template_id,
        form_type=str(form_type or "").strip() or "contact",
        identifier=email,
        email=email,
        first_name=first_name or None,
        last_name=last_name or None,
        phone=phone or None,
        form_data=form_data,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def site_lead_row(row: SiteLead) -> dict[str, Any]:
    return {
        "id": str(row.id),
        "siteId": row.site_id,
        "formTemplateId": row.form_template_id,
        "formType": row.form_type,
        "identifier": row.identifier,
        "email": row.email,
        "firstName": row.first_name,
        "lastName": row.last_name,
        "phone": row.phone,
        "formData": dict(row.form_data or {}),
        "createdAt": row.created_at.isoformat() if row.created_at else None,
    }
