from __future__ import annotations

from dataclasses import dataclass, field

from leadforms.schemas.forms import FieldTranslation
from leadforms.services.field_types import DataType
from leadforms.services.form_fields import ResolvedField

DEFAULT_LANGUAGE = "en"
DEFAULT_ITEM_LABEL = "Item"

VALIDATION_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "required": "This field is required",
        "invalid_email": "Please enter a valid email address",
        "invalid_phone": "Please enter a valid phone number",
        "invalid_number": "Please enter a valid number",
        "invalid_format": "Please match the requested format",
        "too_short": "Please enter at least {min} characters",
        "too_long": "Please enter no more than {max} characters",
        "select_option": "Please select an option",
        "select_one_option": "Please select one of the available options",
        "at_least_one": "At least one item is required",
        "invalid_value": "Please enter a valid value",
    },
    "es": {
        "required": "Este campo es obligatorio",
        "invalid_email": "Por favor, introduce un correo electrónico válido",
        "invalid_phone": "Por favor, introduce un número de teléfono válido",
        "invalid_number": "Por favor, introduce un número válido",
        "invalid_format": "Por favor, respeta el formato solicitado",
        "too_short": "Introduce al menos {min} caracteres",
        "too_long": "Introduce como máximo {max} caracteres",
        "select_option": "Por favor, selecciona una opción",
        "select_one_option": "Por favor, selecciona una de las opciones disponibles",
        "at_least_one": "Se requiere al menos un elemento",
        "invalid_value": "Por favor, introduce un valor válido",
    },
}


def messages_for(language: str | None) -> dict[str, str]:
    return VALIDATION_MESSAGES.get(str(language or "").strip().lower(), VALIDATION_MESSAGES[DEFAULT_LANGUAGE])


def _first_text(*candidates: str | None) -> str | None:
    for candidate in candidates:
        if candidate is None:
            continue
        text = str(candidate)
        if text.strip():
            return text
    return None


def _clean_options(options: list[str] | None) -> list[str]:
    return [option for option in (options or []) if option is not None and str(option).strip()]


@dataclass(frozen=True)
class LocalizedField:
    label: str
    placeholder: str
    description: str | None
    options: list[str] = field(default_factory=list)
    item_label: str = DEFAULT_ITEM_LABEL
    item_placeholder: str = ""


def _translation(field_item: ResolvedField, language: str) -> FieldTranslation:
    return field_item.entry.translations.get(str(language or "").strip().lower()) or FieldTranslation()


def resolve_options(field_item: ResolvedField, language: str = DEFAULT_LANGUAGE) -> list[str]:
    """Option list for choice and multi-select fields.

    Translated options win over the entry's own list. Select fields may carry
    their list in ``enumList`` instead of ``defaultValidation.options``.
    Assignments cannot override options.
    """
    translated = _clean_options(_translation(field_item, language).options)
    if translated:
        return translated
    entry = field_item.entry
    if field_item.data_type == DataType.SELECT:
        enum_options = _clean_options(entry.enum_list)
        if enum_options:
            return enum_options
    return _clean_options(entry.default_validation.options)


def localize_field(field_item: ResolvedField, language: str = DEFAULT_LANGUAGE) -> LocalizedField:
    entry = field_item.entry
    assignment = field_item.assignment
    translation = _translation(field_item, language)
    validation = entry.default_validation

    label = _first_text(assignment.custom_label, translation.label, entry.label, entry.name) or ""
    placeholder = _first_text(assignment.custom_placeholder, translation.placeholder, entry.default_placeholder) or ""
    if not placeholder and field_item.data_type == DataType.SELECT:
        placeholder = f"Select {label.lower()}"
    description = _first_text(translation.description, validation.description)
    item_label = _first_text(translation.item_label, validation.item_label) or DEFAULT_ITEM_LABEL
    item_placeholder = _first_text(translation.item_placeholder, validation.item_placeholder) or (
        f"Enter {item_label.lower()}..."
    )
    return LocalizedField(
        label=label,
        placeholder=placeholder,
        description=description,
        options=resolve_options(field_item, language),
        item_label=item_label,
        item_placeholder=item_placeholder,
    )
