"""Serializes form documents to and from a key-value store"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from form_designer.backends.key_value_store import KeyValueStore
from form_designer.models.form_field import FormField

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "formBuilderData"
EXPORT_FILENAME = "form-definition.json"

# Stored documents keep the browser designer's key names
STORED_KEYS = {"field_type": "type", "default_value": "defaultValue"}
FIELD_ATTRIBUTES = {stored: name for name, stored in STORED_KEYS.items()}


class ExportFile(BaseModel):
    """Bytes offered to the user as a download"""

    filename: str
    content: bytes
    media_type: str = "application/json"


class PersistenceGateway:
    """
    Saves the field list as a JSON array under a single storage key.

    Loading never fails: a missing, corrupted or unreadable document yields an
    empty field list so the designer can always start.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        """
        Args:
            store: Backend exposing get/set of a serialized blob
            key: Storage key the document lives under
        """
        self.store = store
        self.key = key

    def serialize(self, fields: Sequence[FormField], indent: Optional[int] = None) -> str:
        return json.dumps([self._to_stored(field) for field in fields], indent=indent)

    def _to_stored(self, field: FormField) -> Dict[str, Any]:
        return {STORED_KEYS.get(key, key): value for key, value in field.model_dump().items()}

    def _normalize(self, item: Dict[str, Any]) -> Dict[str, Any]:
        normalized = {}
        for key, value in item.items():
            normalized[FIELD_ATTRIBUTES.get(key, key)] = value
        return normalized

    def deserialize(self, text: str) -> List[FormField]:
        """
        Parse a serialized document.

        Entries that are not valid field objects are skipped so one bad field
        does not cost the rest of the document. Both the stored key names
        (type, defaultValue) and the attribute names are accepted.

        Raises:
            ValueError: If the text is not a JSON array
        """
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("Serialized document must be a JSON array")

        fields: List[FormField] = []
        seen_ids = set()
        for item in data:
            if not isinstance(item, dict):
                logger.warning(f"Skipping {type(item).__name__} entry in stored document")
                continue
            try:
                field = FormField.model_validate(self._normalize(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid field in stored document: {e}")
                continue

            if field.id in seen_ids:
                logger.warning(f"Skipping duplicate field id {field.id} in stored document")
                continue
            if field.has_options and not field.options:
                logger.warning(f"Field {field.id} had no options, restoring one")
                field.options = ["Option 1"]

            seen_ids.add(field.id)
            fields.append(field)
        return fields

    def save(self, fields: Sequence[FormField]) -> None:
        self.store.set(self.key, self.serialize(fields))
        logger.debug(f"Saved {len(fields)} fields under '{self.key}'")

    def load(self) -> List[FormField]:
        """Load the stored field list, or an empty list if there is none"""
        try:
            text = self.store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read stored document '{self.key}': {e}")
            return []

        if not text:
            return []

        try:
            fields = self.deserialize(text)
        except (ValueError, ValidationError) as e:
            logger.error(f"Corrupted document under '{self.key}', starting empty: {e}")
            return []

        logger.info(f"Loaded {len(fields)} fields from '{self.key}'")
        return fields

    def export(
        self, fields: Sequence[FormField], filename: str = EXPORT_FILENAME
    ) -> ExportFile:
        """Save, then render the document as an indented JSON download"""
        self.save(fields)
        content = self.serialize(fields, indent=2).encode("utf-8")
        return ExportFile(filename=filename, content=content)
