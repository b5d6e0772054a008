"""Accessors exposed to installed apps at runtime"""

from appingest.core.accessors.persistence import (
    AssociationModel,
    AssociationRecord,
    PersistenceBridge,
    PersistenceRead,
)

__all__ = [
    "AssociationModel",
    "AssociationRecord",
    "PersistenceBridge",
    "PersistenceRead",
]
