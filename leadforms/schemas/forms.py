"""Admin-authored form data as the engine reads it.

Field library entries and their per-template assignments arrive as camelCase
JSON (from the public API or the local repository). Every model accepts both the
camelCase wire keys and the snake_case attribute names, ignores unknown keys and
treats ``null`` containers as empty.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


FieldValue = Union[str, List[str]]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class FieldValidation(_WireModel):
    required: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    options: Optional[List[str]] = None
    description: Optional[str] = None
    item_type: Optional[str] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    item_label: Optional[str] = None
    item_placeholder: Optional[str] = None

    def merged_with(self, override: "FieldValidation | None") -> "FieldValidation":
        """Return a copy with every value explicitly set on ``override`` applied on top."""
        if override is None:
            return self
        changes = {key: value for key, value in override.model_dump().items() if value is not None}
        return self.model_copy(update=changes)


class FieldTranslation(_WireModel):
    label: Optional[str] = None
    placeholder: Optional[str] = None
    description: Optional[str] = None
    options: Optional[List[str]] = None
    item_label: Optional[str] = None
    item_placeholder: Optional[str] = None


class FieldLibraryEntry(_WireModel):
    id: Optional[str] = None
    name: str = ""
    label: str = ""
    data_type: str = "text"
    default_placeholder: Optional[str] = None
    default_validation: FieldValidation = Field(default_factory=FieldValidation)
    translations: Dict[str, FieldTranslation] = Field(default_factory=dict)
    enum_list: Optional[List[str]] = None
    category: Optional[str] = None
    is_system_field: Optional[bool] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("name", "label", "data_type", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("default_validation", mode="before")
    @classmethod
    def _none_as_empty_validation(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("translations", mode="before")
    @classmethod
    def _drop_empty_translations(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        # Keys are matched against lowercased language codes.
        return {
            str(lang).strip().lower(): item
            for lang, item in value.items()
            if isinstance(item, (dict, FieldTranslation))
        }


class FieldAssignment(_WireModel):
    id: Optional[str] = None
    form_template_id: Optional[str] = None
    field_library_id: Optional[str] = None
    is_required: bool = False
    order: str = "0"
    custom_label: Optional[str] = None
    custom_placeholder: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("customPlaceholder", "placeholder", "custom_placeholder"),
    )
    custom_validation: Optional[FieldValidation] = None
    section: Optional[str] = None
    field_library: Optional[FieldLibraryEntry] = None

    @field_validator("id", "form_template_id", "field_library_id", mode="before")
    @classmethod
    def _ids_as_text(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("is_required", mode="before")
    @classmethod
    def _none_as_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("order", mode="before")
    @classmethod
    def _order_as_text(cls, value: Any) -> Any:
        return "0" if value is None else str(value)


class FieldDescriptor(_WireModel):
    field_name: str
    data_type: str
    input_type: str
    resolved_label: str
    resolved_placeholder: str
    resolved_description: Optional[str] = None
    resolved_options: List[str] = Field(default_factory=list)
    is_required: bool
    current_value: FieldValue
    current_error: Optional[str] = None
    order: int
    section: Optional[str] = None
    item_label: Optional[str] = None
    item_placeholder: Optional[str] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
