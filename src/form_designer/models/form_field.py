"""SQLModel FormField model for designer-defined fields"""

import time
import uuid
from typing import List, Union

from sqlmodel import Field, SQLModel

from form_designer.models.field_type import (
    FieldType,
    default_label,
    has_options as type_has_options,
)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(number: int) -> str:
    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
        if number == 0:
            return "".join(reversed(digits))


def generate_field_id() -> str:
    """
    Generate an opaque field identifier.

    A base-36 millisecond timestamp followed by 12 random hex digits. The random
    part alone keeps ids collision-free within a process; the timestamp only
    makes them roughly sortable when inspecting saved documents.
    """
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    return f"{timestamp}{uuid.uuid4().hex[:12]}"


class FormField(SQLModel):
    """One designer-defined input in the form schema (not a database table)"""

    id: str = Field(default_factory=generate_field_id)
    # Kept as the raw string so unknown types survive a save/load round trip
    field_type: str = Field(default=FieldType.TEXT.value)
    label: str = ""
    required: bool = False
    placeholder: str = ""  # Only meaningful for text, email and number
    default_value: Union[bool, str] = ""  # bool for checkbox fields
    options: List[str] = Field(default_factory=list)  # For dropdown and radio

    @property
    def resolved_type(self) -> FieldType:
        return FieldType.resolve(self.field_type)

    @property
    def has_options(self) -> bool:
        return type_has_options(self.field_type)


def create_field(field_type: Union[FieldType, str]) -> FormField:
    """
    Build a new field with the defaults for its type.

    Dropdown and radio fields start with two options; every other type starts
    with an empty option list. Unknown types are kept verbatim and labelled
    "New Field".
    """
    type_value = field_type.value if isinstance(field_type, FieldType) else str(field_type)
    return FormField(
        field_type=type_value,
        label=default_label(type_value),
        options=["Option 1", "Option 2"] if type_has_options(type_value) else [],
    )
