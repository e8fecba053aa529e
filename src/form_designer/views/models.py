"""Immutable view models produced by the projector"""

from typing import Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# How a rendering layer should route input from an editor: through the
# commit scheduler (text typing) or straight to the document (toggles, choices)
CommitMode = Literal["debounced", "immediate"]


class ViewModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Choice(ViewModel):
    label: str
    value: str
    selected: bool = False


class InputWidget(ViewModel):
    """A renderable input control"""

    kind: Literal["input", "checkbox", "radio_group", "select"]
    input_type: str = "text"  # HTML input type for kind="input"
    name: Optional[str] = None
    placeholder: str = ""
    value: str = ""
    checked: bool = False
    required: bool = False
    disabled: bool = False
    choices: Tuple[Choice, ...] = ()


# Builder canvas


class FieldSummary(ViewModel):
    field_id: str
    field_type: str
    label: str
    required: bool
    highlighted: bool
    widget: InputWidget


class BuilderView(ViewModel):
    kind: Literal["fields"] = "fields"
    rows: Tuple[FieldSummary, ...]


class BuilderEmptyState(ViewModel):
    kind: Literal["empty"] = "empty"
    message: str = "Drag fields here or click on a field type to add"


# Property panel


class TextEditor(ViewModel):
    kind: Literal["text"] = "text"
    property: str
    label: str
    value: str
    commit: CommitMode = "debounced"


class ToggleEditor(ViewModel):
    kind: Literal["toggle"] = "toggle"
    property: str
    label: str
    checked: bool
    commit: CommitMode = "immediate"


class RadioGroupEditor(ViewModel):
    kind: Literal["radio_group"] = "radio_group"
    property: str
    label: str
    choices: Tuple[Choice, ...]
    commit: CommitMode = "immediate"


class SelectEditor(ViewModel):
    kind: Literal["select"] = "select"
    property: str
    label: str
    choices: Tuple[Choice, ...]
    commit: CommitMode = "immediate"


DefaultValueEditor = Union[ToggleEditor, RadioGroupEditor, SelectEditor, TextEditor]


class OptionEditor(ViewModel):
    index: int
    value: str
    stream: str
    removable: bool
    commit: CommitMode = "debounced"


class OptionsEditor(ViewModel):
    label: str = "Options"
    options: Tuple[OptionEditor, ...]
    add_label: str = "Add Option"


class PropertyPanel(ViewModel):
    kind: Literal["field"] = "field"
    field_id: str
    field_type: str
    label_editor: TextEditor
    required_toggle: ToggleEditor
    placeholder_editor: Optional[TextEditor] = None
    default_value_editor: DefaultValueEditor = Field(discriminator="kind")
    options_editor: Optional[OptionsEditor] = None


class EmptySelectionPanel(ViewModel):
    kind: Literal["empty"] = "empty"
    message: str = "Select a field to edit its properties"


# Preview


class PreviewField(ViewModel):
    name: str
    label: str
    required: bool
    widget: InputWidget


class SubmitAction(ViewModel):
    label: str = "Submit Form"


class PreviewForm(ViewModel):
    title: str = "Form Preview"
    fields: Tuple[PreviewField, ...]
    submit: SubmitAction = SubmitAction()


class Submission(ViewModel):
    """Name/value pairs collected from a submitted preview form"""

    data: Dict[str, str]
    missing_required: Tuple[str, ...] = ()
