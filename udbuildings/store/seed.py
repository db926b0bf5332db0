from __future__ import annotations

"""Flat-file seed source for an empty buildings table.

Format: one building per line, four ``:``-separated fields in the order
code, name, latitude, longitude. No header and no escaping::

    A1:Tower:10.0:20.0
    A2:Hall:11.0:21.0

Every field must be non-empty, so a line such as ``A1:Tower:10.0:`` is
malformed. A leading UTF-8 byte order mark is ignored. A malformed line raises
:class:`SeedParseFailure`; the store treats that as fatal for the whole
seeding pass (see ``BuildingStore.open``).
"""

import logging
import pathlib
from typing import Iterator, Optional, Union

from .errors import SeedParseFailure
from .records import BuildingRecord

log = logging.getLogger(__name__)

DELIMITER = ":"
FIELD_COUNT = 4
BOM = "\ufeff"


def parse_seed_line(line: str, line_no: Optional[int] = None, path: Optional[str] = None) -> BuildingRecord:
    """Split one seed line into an unsaved :class:`BuildingRecord`."""
    tokens = line.rstrip("\r\n").split(DELIMITER)
    if len(tokens) != FIELD_COUNT:
        raise SeedParseFailure(
            f"expected {FIELD_COUNT} '{DELIMITER}'-separated fields, got {len(tokens)}",
            path=path,
            line_no=line_no,
        )
    empty = [i + 1 for i, token in enumerate(tokens) if not token]
    if empty:
        raise SeedParseFailure(
            f"field {empty[0]} is empty",
            path=path,
            line_no=line_no,
        )
    code, name, latitude, longitude = tokens
    return BuildingRecord(None, code, name, latitude, longitude)


class FileSeedSource:
    """Lazily yields records from a seed file.

    An absent file yields nothing. Each iteration re-opens the file; a single
    pass is all the store needs.
    """

    def __init__(self, path: Union[str, pathlib.Path], encoding: str = "utf-8-sig") -> None:
        self.path = pathlib.Path(path)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"FileSeedSource({str(self.path)!r})"

    def __iter__(self) -> Iterator[BuildingRecord]:
        if not self.path.is_file():
            log.info("Seed file %s not found; nothing to seed", self.path)
            return
        try:
            with self.path.open("r", encoding=self.encoding, newline="") as fh:
                for line_no, line in enumerate(fh, start=1):
                    if not line.strip():
                        continue
                    if line_no == 1:
                        line = line.lstrip(BOM)
                    yield parse_seed_line(line, line_no, str(self.path))
        except (OSError, UnicodeDecodeError) as exc:
            raise SeedParseFailure(f"cannot read seed file: {exc}", path=str(self.path)) from exc
