import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from leadforms.core.config import settings
from leadforms.db.session import get_db
from leadforms.schemas.public import PublicLeadCreate
from leadforms.services.form_repository import create_site_lead, site_lead_row
from leadforms.services.lead_submission import STANDARD_LEAD_FIELDS
from leadforms.services.rate_limit import get_rate_limiter, hit_lead_submission

router = APIRouter()
_LOG = logging.getLogger("leadforms.forms")


def _client_ip(request: Request) -> str:
    xff = str(request.headers.get("x-forwarded-for") or "").strip()
    if xff:
        first = xff.split(",")[0].strip()
        if first:
            return first
    client = request.client
    return str(client.host if client else "unknown")


def _rate_limit_or_429(request: Request, response: Response) -> None:
    result = hit_lead_submission(get_rate_limiter(), _client_ip(request))
    if not result.allowed:
        retry_after = max(result.retry_after_seconds, 1)
        _LOG.warning("Lead submissions throttled used=%s limit=%s", result.used, result.limit)
        raise HTTPException(
            status_code=429,
            detail=f"Too many submissions. Try again in {retry_after} seconds.",
            headers={**result.headers, "Retry-After": str(retry_after)},
        )
    response.headers.update(result.headers)


def _form_data(payload: PublicLeadCreate) -> dict:
    if payload.form_data is not None:
        return dict(payload.form_data)
    # Flat bodies: everything except the routing keys is form data.
    data = dict(payload.model_extra or {})
    for key, value in (
        ("firstName", payload.first_name),
        ("lastName", payload.last_name),
        ("phone", payload.phone),
    ):
        if value:
            data[key] = value
    return data


def _clean(value) -> str | None:
    text = str(value or "").strip()
    return text or None


@router.post("", status_code=201)
def create_lead(payload: PublicLeadCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    _rate_limit_or_429(request, response)
    form_data = _form_data(payload)
    email = _clean(payload.email) or _clean(form_data.get("email"))
    if not email:
        raise HTTPException(status_code=400, detail="Email is required as identifier")

    standard = {key: _clean(form_data.get(key)) for key in STANDARD_LEAD_FIELDS}
    row = create_site_lead(
        db,
        email=email,
        site_id=_clean(payload.site_id) or settings.DEFAULT_SITE_ID,
        form_data=form_data,
        form_type=payload.form_type,
        form_template_id=_clean(payload.form_template_id),
        first_name=_clean(payload.first_name) or standard["firstName"],
        last_name=_clean(payload.last_name) or standard["lastName"],
        phone=_clean(payload.phone) or standard["phone"],
    )
    _LOG.info("Lead stored id=%s site=%s template=%s", row.id, row.site_id, row.form_template_id)
    return site_lead_row(row)
