"""Reading and writing of Fallout 3 save files."""

from __future__ import annotations

import os
from enum import Enum, IntEnum
from pathlib import Path
from typing import BinaryIO, Union

from .codec import SEPARATOR, FieldCursor, SaveFormatError

GAME_NAME = "Fallout 3"
SIGNATURE = "FO3SAVEGAME"
SIGNATURE_LENGTH = 11
STANDARD_EXT = ".fos"

MAX_SNAPSHOT_WIDTH = 512
MAX_SNAPSHOT_HEIGHT = 288
MAX_SNAPSHOT_LENGTH = 442368
SNAPSHOT_COLOR_BYTES = 3
SNAPSHOT_FORMAT = "RGB"

PLAYER_SEX_MALE = 0
PLAYER_SEX_FEMALE = 1

# Bytes between the signature and the engine version.
_SIGNATURE_PADDING = 4
# Offset of the separator that tells Fallout 3 saves from look-alikes.
_MARKER_OFFSET = 24
# Number of separator bytes between a string's length and its text.
_STRING_SEPARATORS = 1

_UINT_MAX = 0xFFFFFFFF
_USHORT_MAX = 0xFFFF

PropValue = Union[str, int, bytes]


class FO3Prop(IntEnum):
    """Properties stored in a Fallout 3 save."""

    SAVE_SIGNATURE = 0
    ENGINE_VERSION = 1
    SAVE_NUMBER = 2
    PLAYER_NAME = 3
    PLAYER_LEVEL = 4
    PLAYER_TITLE = 5
    PLAYER_LOCATION = 6
    PLAYER_PLAYTIME = 7
    SNAPSHOT_WIDTH = 8
    SNAPSHOT_HEIGHT = 9
    SNAPSHOT = 10


class _Kind(Enum):
    FIXED_STRING = "fixed string"
    UINT = "unsigned integer"
    STRING = "string"
    BYTES = "bytes"


_KINDS = {
    FO3Prop.SAVE_SIGNATURE: _Kind.FIXED_STRING,
    FO3Prop.ENGINE_VERSION: _Kind.UINT,
    FO3Prop.SAVE_NUMBER: _Kind.UINT,
    FO3Prop.PLAYER_NAME: _Kind.STRING,
    FO3Prop.PLAYER_LEVEL: _Kind.UINT,
    FO3Prop.PLAYER_TITLE: _Kind.STRING,
    FO3Prop.PLAYER_LOCATION: _Kind.STRING,
    FO3Prop.PLAYER_PLAYTIME: _Kind.STRING,
    FO3Prop.SNAPSHOT_WIDTH: _Kind.UINT,
    FO3Prop.SNAPSHOT_HEIGHT: _Kind.UINT,
    FO3Prop.SNAPSHOT: _Kind.BYTES,
}

# Header fields after the signature, in file order. The flag tells whether
# the field is preceded by a separator byte (otherwise by padding).
_HEADER_LAYOUT = (
    (FO3Prop.ENGINE_VERSION, False),
    (FO3Prop.SNAPSHOT_WIDTH, True),
    (FO3Prop.SNAPSHOT_HEIGHT, True),
    (FO3Prop.SAVE_NUMBER, True),
    (FO3Prop.PLAYER_NAME, True),
    (FO3Prop.PLAYER_TITLE, True),
    (FO3Prop.PLAYER_LEVEL, True),
    (FO3Prop.PLAYER_LOCATION, True),
    (FO3Prop.PLAYER_PLAYTIME, True),
)


def _read_field(cursor: FieldCursor, prop: FO3Prop, skip: int, length: int = 0) -> PropValue:
    kind = _KINDS[prop]
    if kind is _Kind.FIXED_STRING:
        return cursor.read_fixed_string(SIGNATURE_LENGTH, skip)
    if kind is _Kind.UINT:
        return cursor.read_uint(skip)
    if kind is _Kind.STRING:
        return cursor.read_string(skip, _STRING_SEPARATORS)
    return cursor.read_bytes(length, skip)


def _write_field(cursor: FieldCursor, prop: FO3Prop, value: PropValue, skip: int) -> None:
    kind = _KINDS[prop]
    if kind is _Kind.FIXED_STRING:
        cursor.write_fixed_string(value, SIGNATURE_LENGTH, skip)
    elif kind is _Kind.UINT:
        cursor.write_uint(value, skip)
    elif kind is _Kind.STRING:
        cursor.write_string(value, skip, _STRING_SEPARATORS)
    else:
        cursor.write_bytes(value, skip)


def _has_marker(stream: BinaryIO) -> bool:
    stream.seek(_MARKER_OFFSET)
    return stream.read(1) == SEPARATOR


class FO3Save:
    """An open Fallout 3 save file and the properties read from it."""

    def __init__(
        self,
        stream: BinaryIO,
        file_name: str,
        values: dict[FO3Prop, PropValue],
        addresses: dict[FO3Prop, int],
        snapshot_length: int,
    ) -> None:
        self._stream: BinaryIO | None = stream
        self.file_name = file_name
        self._values = dict(values)
        self._addresses = dict(addresses)
        self._snapshot_length = snapshot_length

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> FO3Save:
        """Open a Fallout 3 save file for reading and writing.

        Raises ``OSError`` if the file cannot be opened and
        ``SaveFormatError`` if it is not a valid Fallout 3 save.
        """
        path = Path(path)
        stream = path.open("r+b")
        try:
            cursor = FieldCursor(stream)
            values: dict[FO3Prop, PropValue] = {}
            addresses: dict[FO3Prop, int] = {}

            addresses[FO3Prop.SAVE_SIGNATURE] = cursor.position
            values[FO3Prop.SAVE_SIGNATURE] = _read_field(cursor, FO3Prop.SAVE_SIGNATURE, 0)
            if values[FO3Prop.SAVE_SIGNATURE] != SIGNATURE:
                raise SaveFormatError(f"{path} is not a {GAME_NAME} save")
            if not _has_marker(stream):
                raise SaveFormatError(f"{path} is not a {GAME_NAME} save")

            for prop, separated in _HEADER_LAYOUT:
                skip = 1 if separated else _SIGNATURE_PADDING
                addresses[prop] = cursor.position + skip
                values[prop] = _read_field(cursor, prop, skip)

            snapshot_length = (
                values[FO3Prop.SNAPSHOT_WIDTH]
                * values[FO3Prop.SNAPSHOT_HEIGHT]
                * SNAPSHOT_COLOR_BYTES
            )
            if snapshot_length == 0 or snapshot_length > MAX_SNAPSHOT_LENGTH:
                raise SaveFormatError(
                    f"snapshot size of {snapshot_length} bytes is out of range"
                )

            addresses[FO3Prop.SNAPSHOT] = cursor.position + 1
            values[FO3Prop.SNAPSHOT] = _read_field(
                cursor, FO3Prop.SNAPSHOT, 1, snapshot_length
            )
        except BaseException:
            stream.close()
            raise
        return cls(stream, str(path), values, addresses, snapshot_length)

    @property
    def game_name(self) -> str:
        return GAME_NAME

    @property
    def addresses(self) -> dict[FO3Prop, int]:
        """File offsets of the properties."""
        return dict(self._addresses)

    @property
    def snapshot_length(self) -> int:
        """Size in bytes of the RGB snapshot."""
        return self._snapshot_length

    @property
    def snapshot(self) -> bytes:
        """The RGB snapshot held in memory."""
        return self._values[FO3Prop.SNAPSHOT]

    def _require_stream(self) -> BinaryIO:
        if self._stream is None:
            raise ValueError("save file is closed")
        return self._stream

    def _checked(self, prop: FO3Prop, value: PropValue) -> PropValue:
        kind = _KINDS[prop]
        if kind is _Kind.FIXED_STRING:
            FieldCursor._encode(value)
            return value[:SIGNATURE_LENGTH]
        if kind is _Kind.UINT:
            if not isinstance(value, int) or not 0 <= value <= _UINT_MAX:
                raise ValueError(f"{value!r} does not fit in an unsigned 32-bit field")
            return value
        if kind is _Kind.STRING:
            if len(FieldCursor._encode(value)) > _USHORT_MAX:
                raise ValueError("string is too long for a 16-bit length prefix")
            return value
        data = bytes(value)
        if len(data) != self._snapshot_length:
            raise ValueError(
                f"snapshot must be {self._snapshot_length} bytes, got {len(data)}"
            )
        return data

    def write(self) -> None:
        """Write every property held in memory back to the save file.

        Whatever follows the snapshot in the file is kept after it.
        """
        stream = self._require_stream()
        stream.seek(self._addresses[FO3Prop.SNAPSHOT] + self._snapshot_length)
        tail = stream.read()

        cursor = FieldCursor(stream)
        self._addresses[FO3Prop.SAVE_SIGNATURE] = cursor.position
        _write_field(cursor, FO3Prop.SAVE_SIGNATURE, self._values[FO3Prop.SAVE_SIGNATURE], 0)

        for prop, separated in _HEADER_LAYOUT:
            if separated:
                cursor.write_bytes(SEPARATOR)
                skip = 0
            else:
                skip = _SIGNATURE_PADDING
            self._addresses[prop] = cursor.position + skip
            _write_field(cursor, prop, self._values[prop], skip)

        cursor.write_bytes(SEPARATOR)
        self._addresses[FO3Prop.SNAPSHOT] = cursor.position
        _write_field(cursor, FO3Prop.SNAPSHOT, self._values[FO3Prop.SNAPSHOT], 0)
        cursor.write_bytes(tail)

        stream.truncate(cursor.position)
        stream.flush()

    def close(self) -> None:
        """Close the save file. Closing twice does nothing."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def is_open(self) -> bool:
        return self._stream is not None

    def get_prop(self, prop: FO3Prop | int) -> PropValue:
        """Return the in-memory value of a property."""
        return self._values[FO3Prop(prop)]

    def set_prop(self, prop: FO3Prop | int, value: PropValue) -> None:
        """Set the in-memory value of a property."""
        prop = FO3Prop(prop)
        self._values[prop] = self._checked(prop, value)

    def read_prop(self, prop: FO3Prop | int) -> PropValue:
        """Read a property straight from the save file."""
        prop = FO3Prop(prop)
        cursor = FieldCursor(self._require_stream(), self._addresses[prop])
        return _read_field(cursor, prop, 0, self._snapshot_length)

    def write_prop(self, prop: FO3Prop | int, value: PropValue) -> None:
        """Write a property straight to the save file."""
        prop = FO3Prop(prop)
        value = self._checked(prop, value)
        stream = self._require_stream()
        _write_field(FieldCursor(stream, self._addresses[prop]), prop, value, 0)
        stream.flush()

    def __enter__(self) -> FO3Save:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def is_fo3_save(path: str | os.PathLike[str]) -> bool:
    """Tell whether the file at ``path`` looks like a Fallout 3 save."""
    try:
        with open(path, "rb") as stream:
            signature = FieldCursor(stream).read_fixed_string(SIGNATURE_LENGTH)
            if signature != SIGNATURE:
                return False
            return _has_marker(stream)
    except (OSError, SaveFormatError):
        return False