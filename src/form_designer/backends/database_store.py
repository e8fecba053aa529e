"""SQL database key-value store built on the stored_documents table"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from form_designer.models.stored_document import StoredDocument, utcnow

logger = logging.getLogger(__name__)


class DatabaseStore:
    """Upserts one StoredDocument row per key"""

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            SQLModel.metadata.create_all(engine, tables=[StoredDocument.__table__])

    def get(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            document = session.get(StoredDocument, key)
            return document.payload if document else None

    def set(self, key: str, value: str) -> None:
        try:
            with Session(self.engine) as session:
                document = session.get(StoredDocument, key)
                if document is None:
                    document = StoredDocument(key=key, payload=value)
                else:
                    document.payload = value
                    document.updated_at = utcnow()
                session.add(document)
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error saving document {key}: {e}")
            raise


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    return create_engine(database_url, echo=echo)
