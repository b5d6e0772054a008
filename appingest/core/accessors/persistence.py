"""Read-only persistence accessor handed to installed apps"""

from enum import Enum
from typing import Any, List, Protocol

from pydantic import BaseModel, ConfigDict


class AssociationModel(str, Enum):
    """Host entity kinds a persisted record can be associated with"""
    ROOM = "room"
    MESSAGE = "message"
    USER = "user"
    FILE = "file"
    MISC = "misc"


class AssociationRecord(BaseModel):
    """Links a persisted record to a host entity"""
    model_config = ConfigDict(frozen=True)

    model: AssociationModel
    id: str


class PersistenceBridge(Protocol):
    """Host-side storage bridge; every call is scoped by app id"""

    def read_by_id(self, id: str, app_id: str) -> Any:
        ...

    def read_by_associations(self, associations: List[AssociationRecord], app_id: str) -> List[Any]:
        ...


class PersistenceRead:
    """Persistence reads scoped to a single installed app"""

    def __init__(self, bridge: PersistenceBridge, app_id: str):
        self.bridge = bridge
        self.app_id = app_id

    def read(self, id: str) -> Any:
        return self.bridge.read_by_id(id, self.app_id)

    def read_by_association(self, association: AssociationRecord) -> List[Any]:
        return self.bridge.read_by_associations([association], self.app_id)

    def read_by_associations(self, associations: List[AssociationRecord]) -> List[Any]:
        return self.bridge.read_by_associations(list(associations), self.app_id)
