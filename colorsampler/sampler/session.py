"""Session-scoped state: the in-flight flag and the saved color list."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional

from colorsampler.sampler.types import ColorSample


@dataclass(slots=True, frozen=True)
class SavedColorEntry:
    id: int
    sample: ColorSample
    timestamp: datetime

    @property
    def hex(self) -> str:
        return self.sample.hex


@dataclass
class ColorSession:
    """State owned by whoever drives the resolver.

    ``busy`` guards against overlapping resolutions; ``entries`` is kept newest
    first.
    """

    busy: bool = False
    advisory_issued: bool = False
    last: Optional[ColorSample] = None
    _entries: List[SavedColorEntry] = field(default_factory=list, repr=False)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    @property
    def entries(self) -> List[SavedColorEntry]:
        return list(self._entries)

    @property
    def samples(self) -> List[ColorSample]:
        return [entry.sample for entry in self._entries]

    def save(self, sample: ColorSample, *, timestamp: Optional[datetime] = None) -> SavedColorEntry:
        entry = SavedColorEntry(id=next(self._ids), sample=sample, timestamp=timestamp or datetime.now())
        self._entries.insert(0, entry)
        return entry

    def get(self, entry_id: int) -> Optional[SavedColorEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def remove(self, entry_id: int) -> bool:
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.id != entry_id]
        return len(self._entries) != before

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ColorSession", "SavedColorEntry"]
