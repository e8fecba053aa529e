"""Ordered field collection plus selection state, and every mutation on it"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from form_designer.models.field_type import FieldType
from form_designer.models.form_field import FormField, create_field

logger = logging.getLogger(__name__)

# Properties that update_field_property may change. id, field_type and options
# have dedicated operations (or none) so their invariants cannot be bypassed.
MUTABLE_PROPERTIES = frozenset({"label", "required", "placeholder", "default_value"})

PROPERTY_ALIASES = {"defaultValue": "default_value"}

_TEXT = TypeAdapter(str)
_FLAG = TypeAdapter(bool)


def canonical_property(property_name: str) -> str:
    return PROPERTY_ALIASES.get(property_name, property_name)


def coerce_property(field: FormField, name: str, value: Any) -> Any:
    """
    Validate a value for one editable property.

    required and a checkbox's default_value are flags ("false" and "off" are
    false); every other property is text.

    Raises:
        ValidationError: If the value does not fit the property
    """
    if name == "required" or (
        name == "default_value" and field.resolved_type == FieldType.CHECKBOX
    ):
        return _FLAG.validate_python(value)
    return _TEXT.validate_python(value)


@dataclass(frozen=True)
class DocumentChange:
    """Outcome of a mutation: whether anything changed and whether it touched the selected field"""

    changed: bool = False
    affects_selection: bool = False
    field_id: Optional[str] = None


NO_CHANGE = DocumentChange()


class FormDocument:
    """
    The single source of truth for the designed form.

    Holds the ordered list of fields (insertion order is display order) and the
    id of the selected field. Every operation is total: unknown ids, out of
    range option indexes and removal of the last option are silent no-ops that
    return NO_CHANGE instead of raising.
    """

    def __init__(self, fields: Optional[Iterable[FormField]] = None):
        self.fields: List[FormField] = list(fields or [])
        self.selected_field_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[FormField]:
        return iter(self.fields)

    def get_field(self, field_id: Optional[str]) -> Optional[FormField]:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    @property
    def selected_field(self) -> Optional[FormField]:
        return self.get_field(self.selected_field_id)

    def _change(self, field_id: str) -> DocumentChange:
        return DocumentChange(
            changed=True,
            affects_selection=field_id == self.selected_field_id,
            field_id=field_id,
        )

    def _option_field(self, field_id: str) -> Optional[FormField]:
        field = self.get_field(field_id)
        if field is None or not field.has_options:
            return None
        return field

    def add_field(self, field_type: Union[FieldType, str]) -> FormField:
        """Append a new field of the given type and select it"""
        field = create_field(field_type)
        self.fields.append(field)
        self.selected_field_id = field.id
        logger.debug(f"Added {field.field_type} field {field.id}")
        return field

    def remove_field(self, field_id: str) -> DocumentChange:
        field = self.get_field(field_id)
        if field is None:
            return NO_CHANGE

        was_selected = self.selected_field_id == field_id
        self.fields = [f for f in self.fields if f.id != field_id]
        if was_selected:
            self.selected_field_id = None

        logger.debug(f"Removed field {field_id}")
        return DocumentChange(
            changed=True, affects_selection=was_selected, field_id=field_id
        )

    def select_field(self, field_id: Optional[str]) -> DocumentChange:
        """
        Select the field with this id, or clear the selection when given None.

        An id that matches no field leaves the selection unchanged.
        """
        if field_id is None:
            if self.selected_field_id is None:
                return NO_CHANGE
            self.selected_field_id = None
            return DocumentChange(changed=True, affects_selection=True)

        if self.get_field(field_id) is None or field_id == self.selected_field_id:
            return NO_CHANGE

        self.selected_field_id = field_id
        return DocumentChange(changed=True, affects_selection=True, field_id=field_id)

    def update_field_property(
        self, field_id: str, property_name: str, value: Any
    ) -> DocumentChange:
        """
        Set one property of a field.

        Values are validated per property (see coerce_property); a value of the
        wrong type leaves the field unchanged.
        """
        field = self.get_field(field_id)
        if field is None:
            return NO_CHANGE

        name = canonical_property(property_name)
        if name not in MUTABLE_PROPERTIES:
            logger.warning(f"Ignoring update of non-editable property '{property_name}'")
            return NO_CHANGE

        try:
            coerced = coerce_property(field, name, value)
        except ValidationError:
            logger.warning(f"Ignoring invalid {name} value {value!r} for field {field_id}")
            return NO_CHANGE

        setattr(field, name, coerced)
        return self._change(field_id)

    def add_option(self, field_id: str) -> DocumentChange:
        field = self._option_field(field_id)
        if field is None:
            return NO_CHANGE

        field.options.append(f"Option {len(field.options) + 1}")
        return self._change(field_id)

    def remove_option(self, field_id: str, index: int) -> DocumentChange:
        """Remove one option; the last remaining option can never be removed"""
        field = self._option_field(field_id)
        if field is None or not 0 <= index < len(field.options):
            return NO_CHANGE
        if len(field.options) <= 1:
            logger.debug(f"Keeping last option of field {field_id}")
            return NO_CHANGE

        del field.options[index]
        return self._change(field_id)

    def update_option(self, field_id: str, index: int, value: str) -> DocumentChange:
        field = self._option_field(field_id)
        if field is None or not 0 <= index < len(field.options):
            return NO_CHANGE

        field.options[index] = value
        return self._change(field_id)
