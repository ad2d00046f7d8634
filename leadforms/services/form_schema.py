"""Validation schema synthesized from field assignments.

Each assignment becomes one immutable :class:`FieldRule`; a :class:`FormSchema`
is the ordered collection of rules and validates a whole values mapping field by
field. There is no cross-field validation.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from leadforms.services.field_types import CHOICE_TYPES, LIST_TYPES, DataType
from leadforms.services.form_fields import ResolvedField
from leadforms.services.form_profiles import DYNAMIC_PROFILE, FormProfile
from leadforms.services.localization import DEFAULT_LANGUAGE, messages_for, resolve_options

_LOG = logging.getLogger("leadforms.forms")

EMAIL_RE = re.compile(
    r"^(?!\.)(?!.*\.\.)[A-Za-z0-9_'+\-.]*[A-Za-z0-9_+\-]@(?:[A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,14}$")
NUMBER_RE = re.compile(r"^\d+$")

_TYPE_PATTERNS = {
    DataType.EMAIL: (EMAIL_RE, "invalid_email"),
    DataType.PHONE: (PHONE_RE, "invalid_phone"),
    DataType.NUMBER: (NUMBER_RE, "invalid_number"),
}


@dataclass(frozen=True)
class ValueCheck:
    predicate: Callable[[str], bool]
    message: str

    def passes(self, value: str) -> bool:
        return bool(self.predicate(value))


@dataclass(frozen=True)
class FieldRule:
    field_name: str
    data_type: DataType
    required: bool
    required_message: str
    shape_message: str
    checks: tuple[ValueCheck, ...] = ()
    is_list: bool = False
    min_items: int = 0
    min_items_message: str = ""
    skip_blank_items: bool = False

    def check(self, value: Any) -> str | None:
        """Return the first failing message for ``value`` or ``None``."""
        if self.is_list:
            return self._check_list(value)
        return self._check_scalar(value)

    def _check_scalar(self, value: Any) -> str | None:
        if isinstance(value, (list, tuple, dict)):
            return self.shape_message
        text = _as_text(value)
        if not text.strip():
            return self.required_message if self.required else None
        for item in self.checks:
            if not item.passes(text):
                return item.message
        return None

    def _check_list(self, value: Any) -> str | None:
        if value is None:
            items: list[str] = []
        elif isinstance(value, (list, tuple)):
            items = [_as_text(item) for item in value]
        else:
            return self.shape_message
        if self.skip_blank_items:
            items = [item for item in items if item.strip()]
        if self.required and len(items) < self.min_items:
            return self.min_items_message
        for text in items:
            for item in self.checks:
                if not item.passes(text):
                    return item.message
        return None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FormSchema:
    rules: tuple[FieldRule, ...] = ()
    language: str = DEFAULT_LANGUAGE

    @property
    def field_names(self) -> list[str]:
        return [rule.field_name for rule in self.rules]

    def rule_for(self, field_name: str) -> FieldRule | None:
        for rule in self.rules:
            if rule.field_name == field_name:
                return rule
        return None

    def validate_field(self, field_name: str, value: Any) -> str | None:
        rule = self.rule_for(field_name)
        if rule is None:
            return None
        return rule.check(value)

    def validate(self, values: Mapping[str, Any] | None) -> ValidationResult:
        payload = values or {}
        errors: dict[str, str] = {}
        for rule in self.rules:
            message = rule.check(payload.get(rule.field_name))
            if message:
                errors[rule.field_name] = message
        return ValidationResult(valid=not errors, errors=errors)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _compile_pattern(raw: str | None, field_name: str) -> re.Pattern | None:
    pattern = str(raw or "")
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        _LOG.warning("Ignoring invalid validation pattern field=%s pattern=%r error=%s", field_name, pattern, exc)
        return None


def _pattern_check(regex: re.Pattern, message: str) -> ValueCheck:
    return ValueCheck(predicate=lambda value: regex.search(value) is not None, message=message)


def _membership_check(options: Sequence[str], message: str) -> ValueCheck:
    allowed = frozenset(options)
    return ValueCheck(predicate=lambda value: value in allowed, message=message)


def _required_min_items(field_item: ResolvedField) -> int:
    min_items = field_item.validation.min_items or 0
    return min_items if min_items > 0 else 1


def _string_rule(field_item: ResolvedField, msgs: dict[str, str]) -> FieldRule:
    name = field_item.name
    validation = field_item.validation
    custom = field_item.assignment.custom_validation
    checks: list[ValueCheck] = []

    custom_pattern = _compile_pattern(custom.pattern if custom else None, name)
    if custom_pattern is not None:
        checks.append(_pattern_check(custom_pattern, msgs["invalid_format"]))
    else:
        type_pattern = _TYPE_PATTERNS.get(field_item.data_type)
        if type_pattern is not None:
            regex, key = type_pattern
            checks.append(_pattern_check(regex, msgs[key]))
        default_pattern = _compile_pattern(field_item.entry.default_validation.pattern, name)
        if default_pattern is not None:
            checks.append(_pattern_check(default_pattern, msgs["invalid_format"]))

    if validation.min_length:
        min_length = int(validation.min_length)
        checks.append(
            ValueCheck(predicate=lambda value: len(value) >= min_length, message=msgs["too_short"].format(min=min_length))
        )
    if validation.max_length:
        max_length = int(validation.max_length)
        checks.append(
            ValueCheck(predicate=lambda value: len(value) <= max_length, message=msgs["too_long"].format(max=max_length))
        )

    return FieldRule(
        field_name=name,
        data_type=field_item.data_type,
        required=field_item.is_required,
        required_message=msgs["required"],
        shape_message=msgs["invalid_value"],
        checks=tuple(checks),
    )


def _choice_rule(field_item: ResolvedField, options: list[str], msgs: dict[str, str]) -> FieldRule:
    if not options:
        return FieldRule(
            field_name=field_item.name,
            data_type=field_item.data_type,
            required=field_item.is_required,
            required_message=msgs["required"],
            shape_message=msgs["invalid_value"],
        )
    return FieldRule(
        field_name=field_item.name,
        data_type=field_item.data_type,
        required=field_item.is_required,
        required_message=msgs["select_option"],
        shape_message=msgs["invalid_value"],
        checks=(_membership_check(options, msgs["select_one_option"]),),
    )


def _checkbox_rule(field_item: ResolvedField, msgs: dict[str, str], *, enforce_required: bool) -> FieldRule:
    # A required checkbox accepts "false" unless enforcement is switched on.
    required = enforce_required and field_item.is_required
    checks: tuple[ValueCheck, ...] = ()
    if required:
        checks = (ValueCheck(predicate=lambda value: value == "true", message=msgs["required"]),)
    return FieldRule(
        field_name=field_item.name,
        data_type=field_item.data_type,
        required=required,
        required_message=msgs["required"],
        shape_message=msgs["invalid_value"],
        checks=checks,
    )


def _list_rule(field_item: ResolvedField, options: list[str], msgs: dict[str, str]) -> FieldRule:
    if field_item.data_type == DataType.ARRAY and options:
        return FieldRule(
            field_name=field_item.name,
            data_type=field_item.data_type,
            required=field_item.is_required,
            required_message=msgs["select_option"],
            shape_message=msgs["invalid_value"],
            checks=(_membership_check(options, msgs["select_one_option"]),),
            is_list=True,
            min_items=_required_min_items(field_item),
            min_items_message=msgs["select_option"],
            skip_blank_items=True,
        )
    return FieldRule(
        field_name=field_item.name,
        data_type=field_item.data_type,
        required=field_item.is_required,
        required_message=msgs["at_least_one"],
        shape_message=msgs["invalid_value"],
        is_list=True,
        min_items=_required_min_items(field_item),
        min_items_message=msgs["at_least_one"],
    )


def build_field_rule(
    field_item: ResolvedField,
    *,
    language: str = DEFAULT_LANGUAGE,
    profile: FormProfile = DYNAMIC_PROFILE,
) -> FieldRule:
    msgs = messages_for(language if profile.localized_messages else DEFAULT_LANGUAGE)
    data_type = field_item.data_type
    if data_type in LIST_TYPES:
        return _list_rule(field_item, resolve_options(field_item, language), msgs)
    if data_type in CHOICE_TYPES:
        return _choice_rule(field_item, resolve_options(field_item, language), msgs)
    if data_type == DataType.CHECKBOX:
        return _checkbox_rule(field_item, msgs, enforce_required=profile.enforce_required_checkbox)
    return _string_rule(field_item, msgs)


def build_form_schema(
    fields: Sequence[ResolvedField],
    *,
    language: str = DEFAULT_LANGUAGE,
    profile: FormProfile = DYNAMIC_PROFILE,
) -> FormSchema:
    return FormSchema(
        rules=tuple(build_field_rule(item, language=language, profile=profile) for item in fields),
        language=language,
    )


class FormSchemaCache:
    """Keeps the last synthesized schema until the field list object changes."""

    def __init__(self) -> None:
        self._fields: Sequence[ResolvedField] | None = None
        self._key: tuple[str, FormProfile] | None = None
        self._schema: FormSchema | None = None
        self.builds = 0

    def get(self, fields: Sequence[ResolvedField], *, language: str, profile: FormProfile) -> FormSchema:
        key = (language, profile)
        if self._schema is not None and self._fields is fields and self._key == key:
            return self._schema
        self._schema = build_form_schema(fields, language=language, profile=profile)
        self._fields = fields
        self._key = key
        self.builds += 1
        return self._schema

    def invalidate(self) -> None:
        self._fields = None
        self._key = None
        self._schema = None
