from __future__ import annotations

"""Typed record helpers used by the store.

``BuildingRecord`` mirrors a row of the ``buildings`` table so callers pass
structured data around instead of raw sqlite tuples.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(slots=True)
class BuildingRecord:
    id: Optional[int]     # assigned by the store; None until inserted
    code: str             # e.g. 'A1'
    name: str             # e.g. 'Tower'
    latitude: str         # text-encoded coordinate, e.g. '10.0'
    longitude: str

    @property
    def fields(self) -> Tuple[str, str, str, str]:
        """The four user-editable values, in column order."""
        return (self.code, self.name, self.latitude, self.longitude)
