# palette_cut/colour_map.py
from __future__ import annotations

"""
Quantization result: ordered (VBox, colour) entries.

The representative colour of each entry is the box's avg() taken when the
map is built. Order is the order boxes were handed over by the scheduler.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from .core_types import RGBTuple, coerce_to_rgb_tuple
from .vbox import VBox


@dataclass(frozen=True)
class ColourMapEntry:
    vbox: VBox
    colour: RGBTuple


class ColorMap:
    __slots__ = ("_entries", "_colours")

    def __init__(self, entries: Iterable[ColourMapEntry]) -> None:
        self._entries: Tuple[ColourMapEntry, ...] = tuple(entries)
        self._colours = np.array(
            [e.colour for e in self._entries], dtype=np.int64
        ).reshape(-1, 3)

    @classmethod
    def from_vboxes(cls, vboxes: Iterable[VBox]) -> "ColorMap":
        return cls(ColourMapEntry(vbox=v, colour=v.avg()) for v in vboxes)

    @property
    def entries(self) -> Tuple[ColourMapEntry, ...]:
        return self._entries

    @property
    def vboxes(self) -> List[VBox]:
        return [e.vbox for e in self._entries]

    def palette(self) -> List[RGBTuple]:
        """Representative colours in map order."""
        return [e.colour for e in self._entries]

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ColourMapEntry]:
        return iter(self._entries)

    def map(self, colour: Sequence[int]) -> RGBTuple:
        """Colour of the first box containing `colour`, else the nearest colour."""
        for entry in self._entries:
            if entry.vbox.contains(colour):
                return entry.colour
        return self.nearest(colour)

    def nearest(self, colour: Sequence[int]) -> RGBTuple:
        """Closest representative colour by Euclidean RGB distance; first wins ties."""
        if not self._entries:
            raise ValueError("nearest() on an empty colour map")
        query = np.array(coerce_to_rgb_tuple(colour), dtype=np.int64)
        diff = self._colours - query
        dist2 = np.sum(diff * diff, axis=1)
        return self._entries[int(np.argmin(dist2))].colour

    def __repr__(self) -> str:
        return f"ColorMap({self.palette()!r})"


ColourMap = ColorMap

__all__ = ["ColourMapEntry", "ColorMap", "ColourMap"]
