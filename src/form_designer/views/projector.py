"""
Pure projections from the form document to view models.

None of these functions mutate their inputs or keep state, so projecting an
unchanged document twice yields equal view models.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from form_designer.models.field_type import FieldType, has_options, has_placeholder
from form_designer.models.form_field import FormField
from form_designer.services.commit_scheduler import option_stream
from form_designer.views.models import (
    BuilderEmptyState,
    BuilderView,
    Choice,
    DefaultValueEditor,
    EmptySelectionPanel,
    FieldSummary,
    InputWidget,
    OptionEditor,
    OptionsEditor,
    PreviewField,
    PreviewForm,
    PropertyPanel,
    RadioGroupEditor,
    SelectEditor,
    Submission,
    TextEditor,
    ToggleEditor,
)

CHECKBOX_ON_VALUE = "on"


def field_input_name(field_id: str) -> str:
    """Submission key for a field; unique because field ids are"""
    return f"field_{field_id}"


def _text_value(value: Union[bool, str]) -> str:
    return value if isinstance(value, str) else ""


def _choices(options: Sequence[str], selected: Union[bool, str]) -> List[Choice]:
    return [Choice(label=o, value=o, selected=o == selected) for o in options]


def project_widget(
    field: FormField, name: Optional[str] = None, inert: bool = False
) -> InputWidget:
    """Input control for a field, with the field's default value applied"""
    field_type = field.resolved_type
    common = {
        "name": name,
        "required": field.required and not inert,
        "disabled": inert,
    }

    if field_type == FieldType.CHECKBOX:
        return InputWidget(kind="checkbox", checked=bool(field.default_value), **common)
    if field_type == FieldType.RADIO:
        choices = _choices(field.options, field.default_value)
        return InputWidget(kind="radio_group", choices=choices, **common)
    if field_type == FieldType.DROPDOWN:
        choices = _choices(field.options, field.default_value)
        return InputWidget(kind="select", choices=choices, **common)
    if field_type == FieldType.DATE:
        return InputWidget(
            kind="input",
            input_type="date",
            value=_text_value(field.default_value),
            **common,
        )

    return InputWidget(
        kind="input",
        input_type=field_type.value,
        placeholder=field.placeholder,
        value=_text_value(field.default_value),
        **common,
    )


def project_builder_view(
    fields: Sequence[FormField], selected_id: Optional[str]
) -> Union[BuilderView, BuilderEmptyState]:
    if not fields:
        return BuilderEmptyState()

    rows = [
        FieldSummary(
            field_id=field.id,
            field_type=field.field_type,
            label=field.label,
            required=field.required,
            highlighted=field.id == selected_id,
            widget=project_widget(field, inert=True),
        )
        for field in fields
    ]
    return BuilderView(rows=rows)


def _default_value_editor(field: FormField) -> DefaultValueEditor:
    field_type = field.resolved_type
    value = field.default_value

    if field_type == FieldType.CHECKBOX:
        return ToggleEditor(
            property="default_value", label="Checked by default", checked=bool(value)
        )
    if field_type == FieldType.RADIO:
        return RadioGroupEditor(
            property="default_value",
            label="Default Value",
            choices=_choices(field.options, value),
        )
    if field_type == FieldType.DROPDOWN:
        none_choice = Choice(label="None", value="", selected=value not in field.options)
        return SelectEditor(
            property="default_value",
            label="Default Value",
            choices=[none_choice, *_choices(field.options, value)],
        )
    return TextEditor(property="default_value", label="Default Value", value=_text_value(value))


def _options_editor(field: FormField) -> OptionsEditor:
    removable = len(field.options) > 1
    return OptionsEditor(
        options=[
            OptionEditor(
                index=index,
                value=option,
                stream=option_stream(field.id, index)[1],
                removable=removable,
            )
            for index, option in enumerate(field.options)
        ]
    )


def project_property_panel(
    field: Optional[FormField],
) -> Union[PropertyPanel, EmptySelectionPanel]:
    """
    Editable property set for the selected field.

    The panel's shape follows the field type: a placeholder editor only for
    free-text types, a type-specific default value editor, and an options
    editor only for dropdown and radio fields. Unknown types get the text
    field shape.
    """
    if field is None:
        return EmptySelectionPanel()

    field_type = field.resolved_type
    placeholder_editor = None
    if has_placeholder(field_type):
        placeholder_editor = TextEditor(
            property="placeholder", label="Placeholder", value=field.placeholder
        )

    return PropertyPanel(
        field_id=field.id,
        field_type=field.field_type,
        label_editor=TextEditor(property="label", label="Label", value=field.label),
        required_toggle=ToggleEditor(
            property="required", label="Required Field", checked=field.required
        ),
        placeholder_editor=placeholder_editor,
        default_value_editor=_default_value_editor(field),
        options_editor=_options_editor(field) if has_options(field_type) else None,
    )


def project_preview(fields: Sequence[FormField]) -> PreviewForm:
    preview_fields = [
        PreviewField(
            name=field_input_name(field.id),
            label=field.label,
            required=field.required,
            widget=project_widget(field, name=field_input_name(field.id)),
        )
        for field in fields
    ]
    return PreviewForm(fields=preview_fields)


def _submitted_value(widget: InputWidget, entered: Any) -> Optional[str]:
    """Value a control contributes to a submission; None means the name is absent"""
    choice_values = [choice.value for choice in widget.choices]
    initial = next((c.value for c in widget.choices if c.selected), None)

    if widget.kind == "checkbox":
        if entered is None:
            checked = widget.checked
        else:
            # Browsers send the checkbox value only when it is ticked
            checked = entered is True or entered == CHECKBOX_ON_VALUE
        return CHECKBOX_ON_VALUE if checked else None
    if widget.kind == "radio_group":
        if entered is not None and str(entered) in choice_values:
            return str(entered)
        return initial
    if widget.kind == "select":
        if entered is not None and str(entered) in choice_values:
            return str(entered)
        # A select always submits something: the selected or the first option
        if initial is not None:
            return initial
        return choice_values[0] if choice_values else None

    return widget.value if entered is None else str(entered)


def collect_submission(preview: PreviewForm, entered: Mapping[str, Any]) -> Submission:
    """
    Build the name/value pairs a submitted preview form produces.

    Entered values override each control's initial state. Names that do not
    belong to the form are ignored. Required fields that end up without a
    value are reported in missing_required; nothing else is validated.
    """
    data: Dict[str, str] = {}
    missing: List[str] = []

    for preview_field in preview.fields:
        value = _submitted_value(preview_field.widget, entered.get(preview_field.name))
        if value is not None:
            data[preview_field.name] = value
        if preview_field.required and not value:
            missing.append(preview_field.name)

    return Submission(data=data, missing_required=missing)
