"""Data models for the form designer"""

from form_designer.models.field_type import FieldType
from form_designer.models.form_field import FormField, create_field, generate_field_id
from form_designer.models.stored_document import StoredDocument

__all__ = [
    "FieldType",
    "FormField",
    "StoredDocument",
    "create_field",
    "generate_field_id",
]
