from __future__ import annotations

"""Runtime settings loader for UDBuildings.

This module centralizes all configuration resolution so the rest of the codebase
can consume a *single* ``Settings`` object instead of scattering env reads
throughout the code. Values come from the process environment, optionally
populated from a ``.env`` file via python-dotenv.
"""

import os
import pathlib
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Settings Dataclass
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class Settings:
    """Resolved runtime configuration.

    ``schema_version`` left as ``None`` means "whatever version the code ships"
    (see :data:`udbuildings.store.schema.SCHEMA_VERSION`).
    """

    profile: str = "dev"                          # semantic runtime profile label
    db_path: str = "data/udbuildings.db"
    seed_path: str = "data/UDBuildingPositions"   # flat file read on first open
    seed_encoding: str = "utf-8-sig"             # tolerates a leading BOM
    log_dir: str = "logs"
    log_level: str = "INFO"
    schema_version: Optional[int] = None

    def ensure_dirs(self) -> None:
        """Create directory parents so downstream code never fails on I/O."""
        if self.db_path != ":memory:":
            pathlib.Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        pathlib.Path(self.log_dir).mkdir(parents=True, exist_ok=True)

    def asdict(self) -> Dict[str, Any]:  # convenience for logging/JSON
        return asdict(self)


# ---------------------------------------------------------------------------
# Settings Builders
# ---------------------------------------------------------------------------

def settings_from_env(profile: str = "dev") -> Settings:
    """Assemble settings from env vars (+ ``.env``) and defaults."""
    load_dotenv()
    s = Settings(profile=profile)

    # Storage --------------------------------------------------------------
    s.db_path = os.getenv("UDB_DB_PATH", s.db_path)

    # Seed source ----------------------------------------------------------
    s.seed_path = os.getenv("UDB_SEED_PATH", s.seed_path)
    s.seed_encoding = os.getenv("UDB_SEED_ENCODING", s.seed_encoding)

    # Logs -----------------------------------------------------------------
    s.log_dir = os.getenv("UDB_LOG_DIR", s.log_dir)
    s.log_level = os.getenv("UDB_LOG_LEVEL", s.log_level).upper()

    # Expected schema version ----------------------------------------------
    raw_version = os.getenv("UDB_SCHEMA_VERSION")
    if raw_version:
        try:
            s.schema_version = int(raw_version)
        except ValueError:  # leave default
            pass

    return s


def load_settings(profile: str = "dev") -> Settings:
    """Public loader: returns a fully-initialized :class:`Settings` object."""
    settings = settings_from_env(profile=profile)
    settings.ensure_dirs()
    return settings
