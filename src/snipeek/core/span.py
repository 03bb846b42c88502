"""Borrowed byte views over a caller-owned buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

BufferLike = Union[bytes, bytearray, memoryview]


def as_byte_view(data: BufferLike) -> memoryview:
    """Return a one-dimensional unsigned-byte view of ``data`` without copying.

    Strided byte views are used as they are. Any other view must be
    C-contiguous so it can be recast to bytes.

    Raises:
        TypeError: If ``data`` is a non-contiguous view of anything but
            single bytes.
    """
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        if not view.c_contiguous:
            raise TypeError("non-contiguous buffers must be one-dimensional unsigned bytes")
        view = view.cast("B")
    return view


@dataclass(slots=True, frozen=True, eq=False)
class ByteSpan:
    """A ``[start, stop)`` window over one shared ``memoryview``.

    Every stage of the decoder narrows a span instead of slicing bytes, so
    all results point back into the buffer the caller passed in. Indices
    given to the methods below are relative to ``start``.

    Attributes:
        buffer: View over the whole original buffer.
        start: Absolute offset of the first byte.
        stop: Absolute offset one past the last byte.
    """

    buffer: memoryview
    start: int
    stop: int

    @classmethod
    def of(cls, data: BufferLike | ByteSpan) -> ByteSpan:
        """Wrap a whole buffer (or return an existing span unchanged)."""
        if isinstance(data, ByteSpan):
            return data
        view = as_byte_view(data)
        return cls(view, 0, len(view))

    def __len__(self) -> int:
        return self.stop - self.start

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < len(self):
            raise IndexError("span index out of range")
        return self.buffer[self.start + index]

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __repr__(self) -> str:
        return f"ByteSpan(start={self.start}, stop={self.stop})"

    @property
    def offset(self) -> int:
        """Absolute offset of this span within the original buffer."""
        return self.start

    def get(self, index: int) -> int | None:
        """Return the byte at ``index``, or None when out of range."""
        if 0 <= index < len(self):
            return self.buffer[self.start + index]
        return None

    def sub(self, start: int, stop: int) -> ByteSpan | None:
        """Return the sub-span ``[start, stop)``, or None if it is not inside this span."""
        if not 0 <= start <= stop <= len(self):
            return None
        return ByteSpan(self.buffer, self.start + start, self.start + stop)

    def tail(self, start: int) -> ByteSpan:
        """Return everything from ``start`` to the end, clamped to this span."""
        start = min(max(start, 0), len(self))
        return ByteSpan(self.buffer, self.start + start, self.stop)

    def view(self) -> memoryview:
        """Zero-copy ``memoryview`` of the span's bytes."""
        return self.buffer[self.start : self.stop]

    def tobytes(self) -> bytes:
        """Copy the span's bytes out of the buffer."""
        return self.buffer[self.start : self.stop].tobytes()

    def within(self, other: ByteSpan) -> bool:
        """Check that this span lies inside ``other`` over the same buffer."""
        return (
            self.buffer.obj is other.buffer.obj
            and other.start <= self.start <= self.stop <= other.stop
        )
