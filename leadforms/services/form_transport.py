"""Collaborators consumed by form sessions.

A session needs three things from the outside: the field list of a template, a
place to submit leads, and a connectivity signal. The protocols below describe
them; ``FormApiClient`` talks to the public HTTP API, ``LocalFormBackend`` reads
and writes the database in-process, and ``ConnectivitySignal`` is a plain
observable flag fed by whatever detects network state.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable, Protocol

import httpx
from sqlalchemy.orm import Session, sessionmaker

from leadforms.core.config import settings
from leadforms.services import form_repository

_LOG = logging.getLogger("leadforms.forms")


class FormTransportError(Exception):
    pass


class FieldFetchError(FormTransportError):
    pass


class LeadSubmissionError(FormTransportError):
    pass


class FieldAssignmentSource(Protocol):
    async def fetch_field_assignments(self, form_template_id: str) -> list[dict[str, Any]]:
        ...


class LeadSink(Protocol):
    async def submit_lead(self, payload: dict[str, Any]) -> dict[str, Any]:
        ...


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        detail = data.get("detail") or data.get("error") or data.get("message")
        if detail:
            return str(detail)
    return f"HTTP {response.status_code}"


class FormApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = str(base_url or settings.FORMS_API_BASE_URL).rstrip("/")
        self.timeout = float(timeout if timeout is not None else settings.FORMS_API_TIMEOUT_SECONDS)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def fetch_field_assignments(self, form_template_id: str) -> list[dict[str, Any]]:
        path = f"/api/public/form-templates/{form_template_id}/fields"
        try:
            async with self._client() as client:
                response = await client.get(path)
        except httpx.HTTPError as exc:
            raise FieldFetchError(f"Failed to load form fields: {exc}") from exc
        if response.status_code >= 400:
            raise FieldFetchError(_error_detail(response))
        try:
            data = response.json()
        except ValueError as exc:
            raise FieldFetchError("Form fields response is not valid JSON") from exc
        if not isinstance(data, list):
            raise FieldFetchError("Form fields response is not a list")
        return data

    async def submit_lead(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.post("/api/public/leads", json=payload)
        except httpx.HTTPError as exc:
            raise LeadSubmissionError(f"There was an error submitting your form: {exc}") from exc
        if response.status_code >= 400:
            raise LeadSubmissionError(_error_detail(response))
        data = response.json() if response.content else {}
        return data if isinstance(data, dict) else {"response": data}


class LocalFormBackend:
    """In-process collaborator backed by the SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker | Callable[[], Session]):
        self.session_factory = session_factory

    def _fetch_sync(self, form_template_id: str) -> list[dict[str, Any]]:
        try:
            template_uuid = uuid.UUID(str(form_template_id))
        except ValueError as exc:
            raise FieldFetchError("Invalid form template id") from exc
        with self.session_factory() as db:
            return form_repository.list_form_template_fields(db, template_uuid)

    def _submit_sync(self, payload: dict[str, Any]) -> dict[str, Any]:
        email = str(payload.get("email") or "").strip()
        if not email:
            raise LeadSubmissionError("Email is required as identifier")
        with self.session_factory() as db:
            row = form_repository.create_site_lead(
                db,
                email=email,
                site_id=str(payload.get("siteId") or settings.DEFAULT_SITE_ID),
                form_data=dict(payload.get("formData") or {}),
                form_type=payload.get("formType"),
                form_template_id=payload.get("formTemplateId"),
                first_name=payload.get("firstName"),
                last_name=payload.get("lastName"),
                phone=payload.get("phone"),
            )
            return form_repository.site_lead_row(row)

    async def fetch_field_assignments(self, form_template_id: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._fetch_sync, form_template_id)

    async def submit_lead(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await asyncio.to_thread(self._submit_sync, payload)


class ConnectivitySignal:
    def __init__(self, online: bool = True):
        self._online = bool(online)
        self._listeners: list[Callable[[bool], None]] = []

    @property
    def online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        online = bool(online)
        if online == self._online:
            return
        self._online = online
        _LOG.info("Connectivity changed online=%s", online)
        for listener in list(self._listeners):
            listener(online)

    def subscribe(self, listener: Callable[[bool], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
