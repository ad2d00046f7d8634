import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from leadforms.core.config import settings
from leadforms.db.session import get_db
from leadforms.services.form_defaults import default_values
from leadforms.services.form_descriptors import build_descriptor
from leadforms.services.form_fields import resolve_field_assignments
from leadforms.services.form_profiles import PROFILES, profile_from_settings
from leadforms.services.form_repository import get_form_template, list_form_template_fields

router = APIRouter()


def _template_id_or_404(db: Session, form_template_id: str) -> uuid.UUID:
    try:
        template_uuid = uuid.UUID(str(form_template_id))
    except ValueError:
        raise HTTPException(status_code=404, detail="Form template not found")
    template = get_form_template(db, template_uuid)
    if template is None or not template.is_active:
        raise HTTPException(status_code=404, detail="Form template not found")
    return template_uuid


@router.get("/{form_template_id}/fields")
def get_form_template_fields(form_template_id: str, db: Session = Depends(get_db)):
    template_uuid = _template_id_or_404(db, form_template_id)
    return list_form_template_fields(db, template_uuid)


@router.get("/{form_template_id}/descriptors")
def get_form_template_descriptors(
    form_template_id: str,
    lang: str | None = Query(None, max_length=16),
    profile: str | None = Query(None),
    db: Session = Depends(get_db),
):
    template_uuid = _template_id_or_404(db, form_template_id)
    profile_name = str(profile or "").strip().lower() or None
    if profile_name is not None and profile_name not in PROFILES:
        raise HTTPException(status_code=400, detail=f"Unknown form profile: {profile}")
    form_profile = profile_from_settings(profile_name)
    language = str(lang or settings.DEFAULT_LANGUAGE).strip().lower() or "en"

    fields = resolve_field_assignments(list_form_template_fields(db, template_uuid))
    values = default_values(fields, form_profile)
    return {
        "formTemplateId": str(template_uuid),
        "language": language,
        "profile": form_profile.name,
        "fields": [
            build_descriptor(item, language=language, value=values.get(item.name)).model_dump(by_alias=True)
            for item in fields
        ],
    }
