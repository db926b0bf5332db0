"""UDBuildings storage subsystem (public API).

Import the :class:`BuildingStore` facade from here::

    from udbuildings.store import BuildingStore

This file stays tiny. Implementation lives in :mod:`udbuildings.store.store`.
"""

from .errors import (
    ConstraintViolation,
    NotFound,
    SchemaVersionError,
    SeedParseFailure,
    StorageUnavailable,
    StoreError,
    StoreStateError,
)
from .records import BuildingRecord
from .schema import SCHEMA_VERSION
from .seed import FileSeedSource, parse_seed_line
from .store import BuildingStore

__all__ = [
    "BuildingStore",
    "BuildingRecord",
    "FileSeedSource",
    "parse_seed_line",
    "SCHEMA_VERSION",
    "StoreError",
    "StorageUnavailable",
    "StoreStateError",
    "SchemaVersionError",
    "ConstraintViolation",
    "NotFound",
    "SeedParseFailure",
]
