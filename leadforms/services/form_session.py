"""Runtime form session: load fields, hold values, validate and submit.

Status flow::

    IDLE -> LOADING -> READY -> SUBMITTING -> SUCCEEDED
                  \\                  \\
                   -> FAILED           -> FAILED -> READY (submission rejected)

``refresh()`` re-runs loading from any state. A closed session never changes
state again, including when a pending fetch or retry timer was in flight.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Sequence

from leadforms.core.config import settings
from leadforms.schemas.forms import FieldDescriptor, FieldValue
from leadforms.services.field_types import LIST_TYPES
from leadforms.services.form_defaults import default_values
from leadforms.services.form_descriptors import build_descriptor
from leadforms.services.form_fields import ResolvedField, resolve_field_assignments
from leadforms.services.form_profiles import FormProfile, profile_from_settings
from leadforms.services.form_schema import FormSchema, FormSchemaCache, ValidationResult
from leadforms.services.form_transport import ConnectivitySignal, FieldAssignmentSource, LeadSink
from leadforms.services.lead_submission import build_lead_payload
from leadforms.services.list_editor import ListRowEditor

_LOG = logging.getLogger("leadforms.forms")

LOAD_FAILED_MESSAGE = "Failed to load form fields"
SUBMIT_FAILED_MESSAGE = "There was an error submitting your form. Please try again."
OFFLINE_NOTICE = "You are offline. Form submissions are disabled."


class UnknownFieldError(KeyError):
    pass


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmitBlock(str, Enum):
    SUBMITTING = "submitting"
    OFFLINE = "offline"
    LOADING = "loading"
    LOAD_FAILED = "load_failed"
    NO_FIELDS = "no_fields"
    SUBMITTED = "submitted"
    CLOSED = "closed"


SUBMIT_BLOCK_MESSAGES = {
    SubmitBlock.SUBMITTING: "Submitting...",
    SubmitBlock.OFFLINE: OFFLINE_NOTICE,
    SubmitBlock.LOADING: "Loading form fields...",
    SubmitBlock.LOAD_FAILED: "The form could not be loaded. Refresh the form to try again.",
    SubmitBlock.NO_FIELDS: "No form fields configured. Please contact the administrator to set up this form.",
    SubmitBlock.SUBMITTED: "Your submission has been received.",
    SubmitBlock.CLOSED: "This form has been closed.",
}


def _normalize_value(value: Any, *, is_list: bool) -> FieldValue:
    if is_list:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return ["" if item is None else str(item) for item in value]
        return [str(value)]
    if value is None:
        return ""
    # Kept as a list so the field rule reports the wrong shape.
    if isinstance(value, (list, tuple)):
        return ["" if item is None else str(item) for item in value]
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FormSession:
    def __init__(
        self,
        form_template_id: str,
        *,
        source: FieldAssignmentSource,
        sink: LeadSink,
        site_id: str | None = None,
        connectivity: ConnectivitySignal | None = None,
        language: str | None = None,
        profile: FormProfile | None = None,
        on_success: Callable[[dict[str, Any]], None] | None = None,
    ):
        self.form_template_id = str(form_template_id)
        self.site_id = str(site_id or settings.DEFAULT_SITE_ID)
        self.source = source
        self.sink = sink
        self.connectivity = connectivity or ConnectivitySignal(online=True)
        self.language = str(language or settings.DEFAULT_LANGUAGE).strip().lower() or "en"
        self.profile = profile or profile_from_settings()
        self.on_success = on_success

        self.status = SessionStatus.IDLE
        self.fields: tuple[ResolvedField, ...] = ()
        self.values: dict[str, FieldValue] = {}
        self.errors: dict[str, str] = {}
        self.load_error: str | None = None
        self.submit_error: str | None = None
        self.load_attempts = 0
        self.last_ack: dict[str, Any] | None = None
        self.offline = not self.connectivity.online

        self._schema_cache = FormSchemaCache()
        self._load_task: asyncio.Task | None = None
        self._generation = 0
        self._closed = False
        self._submit_in_flight = False
        self._unsubscribe = self.connectivity.subscribe(self._on_connectivity_change)

    # -- lifecycle ---------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    async def open(self) -> None:
        if self._closed or self.status != SessionStatus.IDLE:
            return
        await self._run_load()

    async def refresh(self) -> None:
        """Refetch the field list and reset values to fresh defaults."""
        if self._closed:
            return
        await self._run_load()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        self._unsubscribe()
        _LOG.debug("Form session closed template=%s status=%s", self.form_template_id, self.status.value)

    async def _run_load(self) -> None:
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        self._generation += 1
        task = asyncio.create_task(self._load(self._generation))
        self._load_task = task
        await asyncio.wait({task})
        if not task.cancelled():
            task.result()

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def _load(self, generation: int) -> None:
        self._set_status(SessionStatus.LOADING)
        self.load_error = None
        self.load_attempts = 0
        retries = self.profile.load_retries if self.profile.retry_on_load_failure else 0
        last_error: Exception | None = None
        for attempt in range(retries + 1):
            if attempt:
                await asyncio.sleep(self.profile.load_retry_delay_seconds)
                if not self._is_current(generation):
                    return
            self.load_attempts = attempt + 1
            try:
                raw_items = await self.source.fetch_field_assignments(self.form_template_id)
            except Exception as exc:
                last_error = exc
                _LOG.warning(
                    "Form fields fetch failed template=%s attempt=%s/%s error=%s",
                    self.form_template_id,
                    attempt + 1,
                    retries + 1,
                    exc,
                )
                if not self._is_current(generation):
                    return
                continue
            if not self._is_current(generation):
                return
            self._apply_fields(raw_items)
            return

        if not self._is_current(generation):
            return
        self.load_error = str(last_error or "").strip() or LOAD_FAILED_MESSAGE
        self._set_status(SessionStatus.FAILED)

    def _apply_fields(self, raw_items: Sequence[Any] | None) -> None:
        self.fields = resolve_field_assignments(raw_items)
        self.values = default_values(self.fields, self.profile)
        self.errors = {}
        self.submit_error = None
        self._set_status(SessionStatus.READY)
        _LOG.info(
            "Form session ready template=%s fields=%s profile=%s language=%s",
            self.form_template_id,
            len(self.fields),
            self.profile.name,
            self.language,
        )

    def _set_status(self, status: SessionStatus) -> None:
        if self._closed:
            return
        if status != self.status:
            _LOG.debug("Form session %s -> %s template=%s", self.status.value, status.value, self.form_template_id)
        self.status = status

    def _on_connectivity_change(self, online: bool) -> None:
        if self._closed:
            return
        self.offline = not online

    # -- schema and values -------------------------------------------------

    @property
    def schema(self) -> FormSchema:
        return self._schema_cache.get(self.fields, language=self.language, profile=self.profile)

    def field(self, field_name: str) -> ResolvedField:
        for item in self.fields:
            if item.name == field_name:
                return item
        raise UnknownFieldError(field_name)

    def set_value(self, field_name: str, value: Any) -> bool:
        if self._closed or self.status != SessionStatus.READY:
            return False
        field_item = self.field(field_name)
        self.values[field_name] = _normalize_value(value, is_list=field_item.data_type in LIST_TYPES)
        if field_name in self.errors:
            message = self.schema.validate_field(field_name, self.values[field_name])
            if message:
                self.errors[field_name] = message
            else:
                self.errors.pop(field_name, None)
        return True

    def toggle_option(self, field_name: str, option: str, checked: bool) -> bool:
        """Check or uncheck one option of a multi-select array field."""
        current = self.values.get(field_name)
        selected = [item for item in current if item] if isinstance(current, list) else []
        if checked and option not in selected:
            selected.append(option)
        elif not checked:
            selected = [item for item in selected if item != option]
        return self.set_value(field_name, selected)

    def validate(self) -> ValidationResult:
        result = self.schema.validate(self.values)
        if not self._closed:
            self.errors = dict(result.errors)
        return result

    # -- submission --------------------------------------------------------

    @property
    def offline_notice(self) -> str | None:
        return OFFLINE_NOTICE if self.offline else None

    @property
    def submit_block(self) -> SubmitBlock | None:
        if self._closed:
            return SubmitBlock.CLOSED
        if self._submit_in_flight or self.status == SessionStatus.SUBMITTING:
            return SubmitBlock.SUBMITTING
        if self.offline:
            return SubmitBlock.OFFLINE
        if self.status in (SessionStatus.IDLE, SessionStatus.LOADING):
            return SubmitBlock.LOADING
        if self.status == SessionStatus.FAILED:
            return SubmitBlock.LOAD_FAILED
        if self.status == SessionStatus.SUCCEEDED:
            return SubmitBlock.SUBMITTED
        if not self.fields:
            return SubmitBlock.NO_FIELDS
        return None

    @property
    def submit_block_message(self) -> str | None:
        block = self.submit_block
        return SUBMIT_BLOCK_MESSAGES[block] if block is not None else None

    @property
    def can_submit(self) -> bool:
        return self.submit_block is None

    async def submit(self) -> bool:
        """Validate and send the lead once; returns True when acknowledged.

        Does nothing while blocked (submitting, offline, loading, no fields).
        A rejected submission is reported in ``submit_error`` and never retried.
        """
        if not self.can_submit:
            _LOG.debug("Submit ignored template=%s block=%s", self.form_template_id, self.submit_block)
            return False
        if not self.validate().valid:
            return False

        generation = self._generation
        payload = build_lead_payload(self.values, form_template_id=self.form_template_id, site_id=self.site_id)
        self.submit_error = None
        self._set_status(SessionStatus.SUBMITTING)
        # Held across refresh(), which may move the status off SUBMITTING.
        self._submit_in_flight = True
        try:
            ack = await self.sink.submit_lead(payload)
        except Exception as exc:
            _LOG.warning("Lead submission failed template=%s error=%s", self.form_template_id, exc)
            if not self._is_current(generation):
                return False
            self.submit_error = str(exc).strip() or SUBMIT_FAILED_MESSAGE
            self._set_status(SessionStatus.FAILED)
            self._set_status(SessionStatus.READY)
            return False
        finally:
            self._submit_in_flight = False

        if not self._is_current(generation):
            return True
        self.last_ack = ack if isinstance(ack, dict) else {"response": ack}
        self.values = default_values(self.fields, self.profile)
        self.errors = {}
        self._set_status(SessionStatus.SUCCEEDED)
        _LOG.info("Lead submitted template=%s site=%s", self.form_template_id, self.site_id)
        if self.on_success is not None:
            self.on_success(self.last_ack)
        return True

    # -- rendering ---------------------------------------------------------

    def descriptor(self, field_item: ResolvedField) -> FieldDescriptor:
        return build_descriptor(
            field_item,
            language=self.language,
            value=self.values.get(field_item.name),
            error=self.errors.get(field_item.name),
        )

    def descriptors(self) -> list[FieldDescriptor]:
        return [self.descriptor(item) for item in self.fields]

    def descriptors_by_section(self) -> dict[str, list[FieldDescriptor]]:
        """Group descriptors by section, keeping field order inside each group."""
        result: dict[str, list[FieldDescriptor]] = {}
        for item in self.descriptors():
            result.setdefault(item.section or "", []).append(item)
        return result

    def list_editor(self, field_name: str) -> ListRowEditor:
        return ListRowEditor(self, field_name)
