"""Edit/preview presentation state machine"""

import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from form_designer.models.form_field import FormField
from form_designer.views.models import PreviewForm, Submission
from form_designer.views.projector import collect_submission, project_preview

logger = logging.getLogger(__name__)

SubmissionHandler = Callable[[Submission], None]


class Mode(str, Enum):
    EDIT = "edit"
    PREVIEW = "preview"


def log_submission(submission: Submission) -> None:
    logger.info(f"Form data: {submission.data}")


class ModeController:
    """
    Switches between editing and previewing the form.

    Preview never mutates the document: the only way out of preview is back to
    edit mode, and submitting only hands the collected values to the
    submission handler.
    """

    def __init__(self, on_submit: Optional[SubmissionHandler] = None):
        self.mode = Mode.EDIT
        self.preview: Optional[PreviewForm] = None
        self.on_submit = on_submit or log_submission

    @property
    def is_preview(self) -> bool:
        return self.mode == Mode.PREVIEW

    def enter_preview(self, fields: Sequence[FormField]) -> PreviewForm:
        """Switch to preview mode and project the preview form"""
        self.mode = Mode.PREVIEW
        self.preview = project_preview(fields)
        return self.preview

    def enter_edit(self) -> None:
        """Leave preview; builder and property views are still current"""
        self.mode = Mode.EDIT
        self.preview = None

    def submit(self, entered: Mapping[str, Any]) -> Optional[Submission]:
        if not self.is_preview or self.preview is None:
            logger.warning("Ignoring form submission outside preview mode")
            return None

        submission = collect_submission(self.preview, entered)
        self.on_submit(submission)
        return submission
