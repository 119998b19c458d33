"""
Backends for adding properties.

FixturePropertyStore keeps new properties in the in-memory fixture collection
and forgets them when the process exits. SqlPropertyStore inserts them into the
properties table. Both are interchangeable behind PropertyStore.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, ContextManager, Dict, Optional

from sqlalchemy.orm import Session

import lightbnb.models_sqlalchemy as models
from lightbnb.models_pydantic import PropertyCreate, PropertyRecord

logger = logging.getLogger(__name__)


class PropertyStore(ABC):
    @abstractmethod
    def add_property(self, property: PropertyCreate) -> PropertyRecord:
        ...


class FixturePropertyStore(PropertyStore):
    """Properties held in a dict keyed by id string, as in properties.json.

    Not synchronized: concurrent adds can hand out the same id.
    """

    def __init__(self, properties: Optional[Dict[str, dict]] = None):
        self.properties = properties if properties is not None else {}

    def add_property(self, property: PropertyCreate) -> PropertyRecord:
        property_id = len(self.properties) + 1
        record = {**property.model_dump(), "id": property_id}
        self.properties[str(property_id)] = record
        logger.info("Stored property %s in memory", property_id)
        return PropertyRecord.model_validate(record)

    def get_property(self, property_id: int) -> Optional[PropertyRecord]:
        record = self.properties.get(str(property_id))
        if record is None:
            return None
        return PropertyRecord.model_validate({**record, "id": property_id})

    def __len__(self):
        return len(self.properties)


class SqlPropertyStore(PropertyStore):
    """Inserts into the properties table using sessions from ``session_scope``."""

    def __init__(self, session_scope: Callable[[], ContextManager[Session]]):
        self.session_scope = session_scope

    def add_property(self, property: PropertyCreate) -> PropertyRecord:
        with self.session_scope() as session:
            db_property = models.Property(**property.model_dump())
            session.add(db_property)
            session.flush()
            return PropertyRecord.model_validate(db_property)
