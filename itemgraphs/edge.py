"""A labelled directed edge with a fixed binary encoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

_FORMAT = struct.Struct("<iiB")


@dataclass(frozen=True)
class Edge:
    """Directed edge ``src -> dst`` carrying a one-byte label."""

    src: int
    dst: int
    label: int

    SIZE: ClassVar[int] = _FORMAT.size

    def to_bytes(self) -> bytes:
        """Encode as two little-endian int32 vertex ids followed by the label byte."""
        try:
            return _FORMAT.pack(self.src, self.dst, self.label)
        except struct.error as exc:
            raise ValueError(f"edge out of encodable range: {self!r}") from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> "Edge":
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        return cls(*_FORMAT.unpack(data))

    def __str__(self) -> str:
        return f"{self.src}, {self.dst}, {self.label}"