"""HTTP API driving a designer session"""

import threading
from typing import Dict, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from form_designer.logging_config import get_logger
from form_designer.services.designer import FormDesigner
from form_designer.services.mode_controller import Mode
from form_designer.views.models import (
    BuilderEmptyState,
    BuilderView,
    EmptySelectionPanel,
    PreviewForm,
    PropertyPanel,
    Submission,
)

router = APIRouter(prefix="/designer", tags=["Designer"])
logger = get_logger(__name__)

_designer_lock = threading.Lock()
_designer: Optional[FormDesigner] = None


def get_designer() -> FormDesigner:
    """Get the shared designer session, creating it from config on first use"""
    global _designer
    if _designer is None:
        with _designer_lock:
            if _designer is None:
                _designer = FormDesigner.from_config()
                logger.info("Initialized designer session")
    return _designer


class AddFieldRequest(BaseModel):
    field_type: str = Field(
        ...,
        description="One of text, email, number, checkbox, radio, date, dropdown",
        json_schema_extra={"example": "dropdown"},
    )


class UpdatePropertyRequest(BaseModel):
    property: str = Field(..., description="label, required, placeholder or default_value")
    value: Union[bool, str]


class TextInputRequest(BaseModel):
    property: str = Field(..., description="label, placeholder or default_value")
    value: str


class OptionTextRequest(BaseModel):
    value: str


class SubmitRequest(BaseModel):
    values: Dict[str, Union[bool, str]] = Field(
        default_factory=dict, description="Entered values keyed by field input name"
    )


class DesignerState(BaseModel):
    mode: Mode
    selected_field_id: Optional[str] = None
    builder: Union[BuilderView, BuilderEmptyState] = Field(discriminator="kind")
    properties: Union[PropertyPanel, EmptySelectionPanel] = Field(discriminator="kind")
    preview: Optional[PreviewForm] = None
    pending_edits: int = 0


def _state(designer: FormDesigner) -> DesignerState:
    return DesignerState(
        mode=designer.mode,
        selected_field_id=designer.selected_field_id,
        builder=designer.builder_view,
        properties=designer.property_panel,
        preview=designer.preview,
        pending_edits=len(designer.scheduler.pending_streams()),
    )


@router.get("", response_model=DesignerState)
async def get_state(designer: FormDesigner = Depends(get_designer)):
    return _state(designer)


@router.post("/fields", response_model=DesignerState)
async def add_field(
    request: AddFieldRequest, designer: FormDesigner = Depends(get_designer)
):
    designer.add_field(request.field_type)
    return _state(designer)


@router.delete("/fields/{field_id}", response_model=DesignerState)
async def remove_field(field_id: str, designer: FormDesigner = Depends(get_designer)):
    designer.remove_field(field_id)
    return _state(designer)


@router.post("/fields/{field_id}/select", response_model=DesignerState)
async def select_field(field_id: str, designer: FormDesigner = Depends(get_designer)):
    designer.select_field(field_id)
    return _state(designer)


@router.patch("/fields/{field_id}", response_model=DesignerState)
async def update_field_property(
    field_id: str,
    request: UpdatePropertyRequest,
    designer: FormDesigner = Depends(get_designer),
):
    """Commit a property change immediately (toggles and choice controls)"""
    designer.update_field_property(field_id, request.property, request.value)
    return _state(designer)


@router.post("/fields/{field_id}/input", response_model=DesignerState)
async def text_input(
    field_id: str,
    request: TextInputRequest,
    designer: FormDesigner = Depends(get_designer),
):
    """Keystroke-level text input; committed after the quiet period"""
    designer.edit_text(field_id, request.property, request.value)
    return _state(designer)


@router.post("/fields/{field_id}/options", response_model=DesignerState)
async def add_option(field_id: str, designer: FormDesigner = Depends(get_designer)):
    designer.add_option(field_id)
    return _state(designer)


@router.delete("/fields/{field_id}/options/{index}", response_model=DesignerState)
async def remove_option(
    field_id: str, index: int, designer: FormDesigner = Depends(get_designer)
):
    designer.remove_option(field_id, index)
    return _state(designer)


@router.put("/fields/{field_id}/options/{index}", response_model=DesignerState)
async def option_text_input(
    field_id: str,
    index: int,
    request: OptionTextRequest,
    designer: FormDesigner = Depends(get_designer),
):
    designer.edit_option_text(field_id, index, request.value)
    return _state(designer)


@router.post("/preview", response_model=DesignerState)
async def enter_preview(designer: FormDesigner = Depends(get_designer)):
    designer.toggle_preview()
    return _state(designer)


@router.post("/edit", response_model=DesignerState)
async def enter_edit(designer: FormDesigner = Depends(get_designer)):
    designer.toggle_edit()
    return _state(designer)


@router.post("/preview/submit", response_model=Submission)
async def submit_preview(
    request: SubmitRequest, designer: FormDesigner = Depends(get_designer)
):
    submission = designer.submit_preview(request.values)
    if submission is None:
        raise HTTPException(status_code=409, detail="Form is not being previewed")
    return submission


@router.get("/export")
async def export_form(designer: FormDesigner = Depends(get_designer)):
    export_file = designer.export()
    return Response(
        content=export_file.content,
        media_type=export_file.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{export_file.filename}"'
        },
    )
