"""Designer session wiring the document, persistence, scheduler and views together"""

import logging
from typing import Any, Callable, List, Mapping, Optional, Protocol, Union

from form_designer.backends import create_store
from form_designer.config import config
from form_designer.models.field_type import FieldType
from form_designer.models.form_field import FormField
from form_designer.services.commit_scheduler import CommitScheduler, option_stream
from form_designer.services.form_document import (
    DocumentChange,
    FormDocument,
    canonical_property,
)
from form_designer.services.mode_controller import Mode, ModeController, SubmissionHandler
from form_designer.services.persistence import (
    EXPORT_FILENAME,
    ExportFile,
    PersistenceGateway,
)
from form_designer.views.models import (
    BuilderEmptyState,
    BuilderView,
    EmptySelectionPanel,
    PreviewForm,
    PropertyPanel,
    Submission,
)
from form_designer.views.projector import project_builder_view, project_property_panel

logger = logging.getLogger(__name__)

FileOffer = Callable[[ExportFile], None]


class ViewSink(Protocol):
    """Rendering collaborator that paints view models"""

    def show_builder(self, view: Union[BuilderView, BuilderEmptyState]) -> None: ...

    def show_properties(self, panel: Union[PropertyPanel, EmptySelectionPanel]) -> None: ...

    def show_preview(self, preview: PreviewForm) -> None: ...

    def hide_preview(self) -> None: ...


class NullViewSink:
    """Sink for callers that read the current views instead of being pushed them"""

    def show_builder(self, view) -> None:
        pass

    def show_properties(self, panel) -> None:
        pass

    def show_preview(self, preview) -> None:
        pass

    def hide_preview(self) -> None:
        pass


def log_file_offer(export_file: ExportFile) -> None:
    logger.info(f"Export ready: {export_file.filename} ({len(export_file.content)} bytes)")


class FormDesigner:
    """
    One editing session over one form document.

    After every mutation that changes the document the session saves a
    snapshot, then recomputes the builder view, then recomputes the property
    panel when the selected field was affected, pushing each view to the sink
    in that order. While previewing, mutations are ignored.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        scheduler: Optional[CommitScheduler] = None,
        view_sink: Optional[ViewSink] = None,
        offer_file: Optional[FileOffer] = None,
        on_submit: Optional[SubmissionHandler] = None,
        export_filename: str = EXPORT_FILENAME,
    ):
        self.gateway = gateway
        self.document = FormDocument(gateway.load())
        self.scheduler = scheduler or CommitScheduler()
        self.modes = ModeController(on_submit)
        self.view_sink = view_sink or NullViewSink()
        self.offer_file = offer_file or log_file_offer
        self.export_filename = export_filename

        self.builder_view = project_builder_view(self.document.fields, None)
        self.property_panel = project_property_panel(None)
        self.view_sink.show_builder(self.builder_view)
        self.view_sink.show_properties(self.property_panel)

    @classmethod
    def from_config(cls, settings: Optional[dict] = None, **kwargs) -> "FormDesigner":
        """Build a session with the store and quiet period named in settings"""
        settings = settings or config
        gateway = PersistenceGateway(create_store(settings), settings["storage_key"])
        scheduler = CommitScheduler(settings["commit_quiet_period_ms"] / 1000)
        return cls(
            gateway,
            scheduler=scheduler,
            export_filename=settings["export_filename"],
            **kwargs,
        )

    @property
    def fields(self) -> List[FormField]:
        return self.document.fields

    @property
    def selected_field_id(self) -> Optional[str]:
        return self.document.selected_field_id

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    @property
    def preview(self) -> Optional[PreviewForm]:
        return self.modes.preview

    def _editable(self, operation: str) -> bool:
        if self.modes.is_preview:
            logger.warning(f"Ignoring {operation} while previewing")
            return False
        return True

    def _refresh_builder(self) -> None:
        self.builder_view = project_builder_view(
            self.document.fields, self.document.selected_field_id
        )
        self.view_sink.show_builder(self.builder_view)

    def _refresh_properties(self) -> None:
        self.property_panel = project_property_panel(self.document.selected_field)
        self.view_sink.show_properties(self.property_panel)

    def _apply(self, change: DocumentChange) -> bool:
        if not change.changed:
            return False
        # Views follow the in-memory document even when the store rejects the write
        try:
            self.gateway.save(self.document.fields)
        finally:
            self._refresh_builder()
            if change.affects_selection:
                self._refresh_properties()
        return True

    def add_field(self, field_type: Union[FieldType, str]) -> Optional[FormField]:
        if not self._editable("add_field"):
            return None
        field = self.document.add_field(field_type)
        self._apply(DocumentChange(changed=True, affects_selection=True, field_id=field.id))
        logger.info(f"Added {field.field_type} field {field.id}")
        return field

    def remove_field(self, field_id: str) -> bool:
        if not self._editable("remove_field"):
            return False
        self.scheduler.cancel_field(field_id)
        return self._apply(self.document.remove_field(field_id))

    def select_field(self, field_id: Optional[str]) -> bool:
        """
        Change the selection.

        Pending text edits of the previously selected field are committed first,
        so switching fields never loses typing.
        """
        if not self._editable("select_field"):
            return False
        previous = self.document.selected_field_id
        target_exists = field_id is None or self.document.get_field(field_id) is not None
        if previous is not None and previous != field_id and target_exists:
            self.scheduler.flush_field(previous)
        return self._apply(self.document.select_field(field_id))

    def update_field_property(self, field_id: str, property_name: str, value: Any) -> bool:
        if not self._editable("update_field_property"):
            return False
        return self._apply(
            self.document.update_field_property(field_id, property_name, value)
        )

    def _flush_option_edits(self, field_id: str) -> None:
        # Option indexes shift on add/remove; pending option text must land first
        for stream in self.scheduler.pending_streams():
            if stream[0] == field_id and stream[1].startswith("option:"):
                self.scheduler.flush(stream)

    def add_option(self, field_id: str) -> bool:
        if not self._editable("add_option"):
            return False
        self._flush_option_edits(field_id)
        return self._apply(self.document.add_option(field_id))

    def remove_option(self, field_id: str, index: int) -> bool:
        if not self._editable("remove_option"):
            return False
        self._flush_option_edits(field_id)
        return self._apply(self.document.remove_option(field_id, index))

    def update_option(self, field_id: str, index: int, value: str) -> bool:
        if not self._editable("update_option"):
            return False
        return self._apply(self.document.update_option(field_id, index, value))

    def edit_text(self, field_id: str, property_name: str, value: str) -> None:
        """Debounced input on a text property editor (label, placeholder, default value)"""
        if not self._editable("edit_text"):
            return
        name = canonical_property(property_name)
        self.scheduler.schedule(
            (field_id, name),
            lambda committed: self.update_field_property(field_id, name, committed),
            value,
        )

    def edit_option_text(self, field_id: str, index: int, value: str) -> None:
        """Debounced input on one option's text editor"""
        if not self._editable("edit_option_text"):
            return
        self.scheduler.schedule(
            option_stream(field_id, index),
            lambda committed: self.update_option(field_id, index, committed),
            value,
        )

    def toggle_preview(self) -> PreviewForm:
        self.scheduler.flush()
        preview = self.modes.enter_preview(self.document.fields)
        self.view_sink.show_preview(preview)
        return preview

    def toggle_edit(self) -> None:
        self.modes.enter_edit()
        self.view_sink.hide_preview()

    def submit_preview(self, entered: Mapping[str, Any]) -> Optional[Submission]:
        return self.modes.submit(entered)

    def export(self) -> ExportFile:
        """Commit pending edits, save, and offer the document as a JSON download"""
        self.scheduler.flush()
        export_file = self.gateway.export(self.document.fields, self.export_filename)
        self.offer_file(export_file)
        logger.info(f"Exported {len(self.document.fields)} fields")
        return export_file
