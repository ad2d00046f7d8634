from __future__ import annotations

from enum import Enum


class DataType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    PHONE = "phone"
    NUMBER = "number"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    ARRAY = "array"
    EXTENSIBLE_LIST = "extensible_list"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str | None) -> "DataType":
        value = str(raw or "").strip().lower()
        try:
            member = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return member


STRING_TYPES = {DataType.TEXT, DataType.TEXTAREA, DataType.EMAIL, DataType.PHONE, DataType.NUMBER, DataType.UNKNOWN}
CHOICE_TYPES = {DataType.RADIO, DataType.SELECT}
LIST_TYPES = {DataType.ARRAY, DataType.EXTENSIBLE_LIST}

INPUT_TYPES = {
    DataType.EMAIL: "email",
    DataType.PHONE: "tel",
    DataType.NUMBER: "number",
    DataType.TEXTAREA: "textarea",
    DataType.SELECT: "select",
    DataType.RADIO: "radio",
    DataType.CHECKBOX: "checkbox",
}


def input_type_for(data_type: DataType, *, has_options: bool = False) -> str:
    if data_type == DataType.ARRAY:
        return "multiselect" if has_options else "list"
    if data_type == DataType.EXTENSIBLE_LIST:
        return "list"
    return INPUT_TYPES.get(data_type, "text")
