"""Field type enumeration and per-type defaults"""

from enum import Enum
from typing import Union


class FieldType(str, Enum):
    """Enum for designer field types"""

    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    DROPDOWN = "dropdown"

    @classmethod
    def resolve(cls, value: Union["FieldType", str, None]) -> "FieldType":
        """Map a stored type string to a member, degrading unknown values to TEXT"""
        try:
            return cls(value)
        except ValueError:
            return cls.TEXT


# Stored as plain values: str-mixin enum members do not hash like their value
OPTION_TYPES = frozenset({FieldType.DROPDOWN.value, FieldType.RADIO.value})
PLACEHOLDER_TYPES = frozenset(
    {FieldType.TEXT.value, FieldType.EMAIL.value, FieldType.NUMBER.value}
)

DEFAULT_LABELS = {
    FieldType.TEXT: "Text Field",
    FieldType.EMAIL: "Email Address",
    FieldType.NUMBER: "Number",
    FieldType.CHECKBOX: "Checkbox",
    FieldType.RADIO: "Radio Button",
    FieldType.DATE: "Date",
    FieldType.DROPDOWN: "Dropdown",
}

FALLBACK_LABEL = "New Field"


def _value(field_type: Union[FieldType, str]) -> str:
    return field_type.value if isinstance(field_type, FieldType) else field_type


def default_label(field_type: Union[FieldType, str]) -> str:
    """Label given to a freshly created field of this type"""
    try:
        return DEFAULT_LABELS[FieldType(field_type)]
    except ValueError:
        return FALLBACK_LABEL


def has_options(field_type: Union[FieldType, str]) -> bool:
    """True for dropdown and radio, the types with an option list"""
    return _value(field_type) in OPTION_TYPES


def has_placeholder(field_type: Union[FieldType, str]) -> bool:
    return _value(field_type) in PLACEHOLDER_TYPES
