"""Positioned readers and writers for the fields of a save file."""

from __future__ import annotations

import struct
from typing import BinaryIO

SEPARATOR = b"|"
ENCODING = "latin-1"

_UINT = struct.Struct("<I")
_USHORT = struct.Struct("<H")


class SaveFormatError(Exception):
    """A save file is truncated or does not have the expected layout."""


class FieldCursor:
    """Reads and writes fields of a binary stream from a moving position.

    Every operation first moves ``skip`` bytes forward, then handles its
    field and leaves ``position`` just past it.
    """

    def __init__(self, stream: BinaryIO, position: int = 0) -> None:
        if position < 0:
            raise ValueError("position must not be negative")
        self.stream = stream
        self.position = position

    def skip(self, count: int) -> int:
        """Move forward by ``count`` bytes and return the new position."""
        if count < 0:
            raise ValueError("cannot skip a negative number of bytes")
        self.position += count
        return self.position

    def _read(self, length: int, skip: int) -> bytes:
        self.skip(skip)
        self.stream.seek(self.position)
        data = self.stream.read(length)
        if len(data) != length:
            raise SaveFormatError(
                f"expected {length} bytes at offset {self.position}, got {len(data)}"
            )
        self.position += length
        return data

    def _write(self, data: bytes, skip: int) -> None:
        self.skip(skip)
        self.stream.seek(self.position)
        written = self.stream.write(data)
        if written is not None and written != len(data):
            raise SaveFormatError(f"short write at offset {self.position}")
        self.position += len(data)

    @staticmethod
    def _encode(value: str) -> bytes:
        try:
            return value.encode(ENCODING)
        except UnicodeEncodeError as exc:
            raise ValueError(f"cannot encode {value!r} for a save file") from exc

    def read_fixed_string(self, length: int, skip: int = 0) -> str:
        """Read a NUL-padded string occupying exactly ``length`` bytes."""
        raw = self._read(length, skip)
        return raw.split(b"\0", 1)[0].decode(ENCODING)

    def write_fixed_string(self, value: str, length: int, skip: int = 0) -> None:
        """Write ``value`` into ``length`` bytes, truncated or NUL-padded."""
        raw = self._encode(value)[:length]
        self._write(raw.ljust(length, b"\0"), skip)

    def read_uint(self, skip: int = 0) -> int:
        """Read a little-endian 32-bit unsigned integer."""
        return _UINT.unpack(self._read(_UINT.size, skip))[0]

    def write_uint(self, value: int, skip: int = 0) -> None:
        """Write a little-endian 32-bit unsigned integer."""
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"{value} does not fit in an unsigned 32-bit field")
        self._write(_UINT.pack(value), skip)

    def read_string(self, skip: int = 0, separator: int = 0) -> str:
        """Read a string stored as a 16-bit length, separator bytes and text."""
        length = _USHORT.unpack(self._read(_USHORT.size, skip))[0]
        return self._read(length, separator).decode(ENCODING)

    def write_string(self, value: str, skip: int = 0, separator: int = 0) -> None:
        """Write a string as a 16-bit length, separator bytes and text."""
        raw = self._encode(value)
        if len(raw) > 0xFFFF:
            raise ValueError("string is too long for a 16-bit length prefix")
        self._write(_USHORT.pack(len(raw)) + SEPARATOR * separator + raw, skip)

    def read_bytes(self, length: int, skip: int = 0) -> bytes:
        """Read exactly ``length`` raw bytes."""
        return self._read(length, skip)

    def write_bytes(self, data: bytes, skip: int = 0) -> None:
        """Write raw bytes."""
        self._write(bytes(data), skip)