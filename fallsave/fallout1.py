"""Reading and writing of Fallout 1 save files."""

from __future__ import annotations

import os
from enum import IntEnum
from pathlib import Path
from typing import BinaryIO, ClassVar, TypeVar

from .codec import FieldCursor, SaveFormatError

GAME_NAME = "Fallout 1"
SIGNATURE = "FALLOUT SAVE FILE"
SIGNATURE_LENGTH = 17
STRING_SIZE = 32
STANDARD_EXT = ".dat"

# Bytes between the signature and the player name.
_PLAYER_NAME_GAP = 12

# Fields in file order: property name, field length, bytes skipped before it.
_LAYOUT = (
    ("SAVE_SIGNATURE", SIGNATURE_LENGTH, 0),
    ("PLAYER_NAME", STRING_SIZE, _PLAYER_NAME_GAP),
    ("SAVE_NAME", STRING_SIZE, 0),
)
_LENGTHS = {name: length for name, length, _ in _LAYOUT}
_LABELS = {
    "SAVE_SIGNATURE": "Save Signature",
    "SAVE_NAME": "Save Name",
    "PLAYER_NAME": "Player Name",
}

_NOT_OPEN = "/!\\ SAVE NOT OPEN /!\\\n"


class FO1Prop(IntEnum):
    """Properties stored in a Fallout 1 save."""

    SAVE_SIGNATURE = 0
    SAVE_NAME = 1
    PLAYER_NAME = 2


def _banner(title: str) -> str:
    line = "*" * (len(title) + 4)
    return f"{line}\n* {title} *\n{line}\n\n"


def _row(label: str, value: object) -> str:
    return f"{label:<14} : {value}"


_S = TypeVar("_S", bound="_ClassicSave")


class _ClassicSave:
    """Shared handling of the classic fixed-field save layout."""

    game_name: ClassVar[str]
    _prop_type: ClassVar[type[IntEnum]]
    _tag: ClassVar[str]

    def __init__(
        self,
        stream: BinaryIO,
        file_name: str,
        values: dict[IntEnum, str],
        addresses: dict[IntEnum, int],
    ) -> None:
        self._stream: BinaryIO | None = stream
        self.file_name = file_name
        self._values = dict(values)
        self._addresses = dict(addresses)

    @classmethod
    def open(cls: type[_S], path: str | os.PathLike[str]) -> _S:
        """Open a save file for reading and writing.

        Raises ``OSError`` if the file cannot be opened and
        ``SaveFormatError`` if it is not a save of this game.
        """
        path = Path(path)
        stream = path.open("r+b")
        try:
            cursor = FieldCursor(stream)
            values: dict[IntEnum, str] = {}
            addresses: dict[IntEnum, int] = {}
            for name, length, gap in _LAYOUT:
                prop = cls._prop_type[name]
                addresses[prop] = cursor.position + gap
                values[prop] = cursor.read_fixed_string(length, gap)
                if name == "SAVE_SIGNATURE" and values[prop] != SIGNATURE:
                    raise SaveFormatError(f"{path} is not a {cls.game_name} save")
        except BaseException:
            stream.close()
            raise
        return cls(stream, str(path), values, addresses)

    @property
    def addresses(self) -> dict[IntEnum, int]:
        """File offsets of the properties."""
        return dict(self._addresses)

    def _require_stream(self) -> BinaryIO:
        if self._stream is None:
            raise ValueError("save file is closed")
        return self._stream

    def _prop(self, prop: IntEnum | int) -> IntEnum:
        return self._prop_type(prop)

    def write(self) -> None:
        """Write every property held in memory back to the save file."""
        stream = self._require_stream()
        cursor = FieldCursor(stream)
        for name, length, gap in _LAYOUT:
            prop = self._prop_type[name]
            self._addresses[prop] = cursor.position + gap
            cursor.write_fixed_string(self._values[prop], length, gap)
        stream.flush()

    def close(self) -> None:
        """Close the save file. Closing twice does nothing."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def is_open(self) -> bool:
        return self._stream is not None

    def get_prop(self, prop: IntEnum | int) -> str:
        """Return the in-memory value of a property."""
        return self._values[self._prop(prop)]

    def set_prop(self, prop: IntEnum | int, value: str) -> None:
        """Set the in-memory value of a property, truncated to its field size."""
        prop = self._prop(prop)
        FieldCursor._encode(value)
        self._values[prop] = value[: _LENGTHS[prop.name]]

    def read_prop(self, prop: IntEnum | int) -> str:
        """Read a property straight from the save file."""
        prop = self._prop(prop)
        cursor = FieldCursor(self._require_stream(), self._addresses[prop])
        return cursor.read_fixed_string(_LENGTHS[prop.name])

    def write_prop(self, prop: IntEnum | int, value: str) -> None:
        """Write a property straight to the save file."""
        prop = self._prop(prop)
        stream = self._require_stream()
        FieldCursor(stream, self._addresses[prop]).write_fixed_string(
            value, _LENGTHS[prop.name]
        )
        stream.flush()

    def format_props(self) -> str:
        """Describe the save's properties as text."""
        text = _banner(f"{self._tag} PROPS")
        if not self.is_open():
            return text + _NOT_OPEN
        lines = [
            _row("Game Name", self.game_name),
            _row("Save File Name", self.file_name),
            "",
        ]
        lines.extend(
            _row(_LABELS[name], self._values[self._prop_type[name]])
            for name, _, _ in _LAYOUT
        )
        return text + "\n".join(lines) + "\n"

    def format_prop_addresses(self) -> str:
        """Describe the file offsets of the save's properties as text."""
        text = _banner(f"{self._tag} PROP ADDRESSES")
        if not self.is_open():
            return text + _NOT_OPEN
        lines = [_row("Save File Name", self.file_name), ""]
        lines.extend(
            _row(_LABELS[prop.name], f"{self._addresses[prop]:016d} {self._addresses[prop]:04X}")
            for prop in self._prop_type
        )
        return text + "\n".join(lines) + "\n"

    def format(self) -> str:
        """Describe the save's properties and their offsets as text."""
        if not self.is_open():
            return _banner(self._tag) + _NOT_OPEN
        return self.format_props() + "\n" + self.format_prop_addresses()

    def __enter__(self: _S) -> _S:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _has_signature(path: str | os.PathLike[str]) -> bool:
    try:
        with open(path, "rb") as stream:
            signature = FieldCursor(stream).read_fixed_string(SIGNATURE_LENGTH)
    except (OSError, SaveFormatError):
        return False
    return signature == SIGNATURE


def _write_sample(path: str | os.PathLike[str], save_name: str) -> Path:
    path = Path(path)
    with path.open("wb") as stream:
        cursor = FieldCursor(stream)
        cursor.write_fixed_string(SIGNATURE, SIGNATURE_LENGTH)
        cursor.write_bytes(bytes(_PLAYER_NAME_GAP))
        cursor.write_fixed_string("John Fallout", STRING_SIZE)
        cursor.write_fixed_string(save_name, STRING_SIZE)
    return path


class FO1Save(_ClassicSave):
    """An open Fallout 1 save file and the properties read from it."""

    game_name = GAME_NAME
    _prop_type = FO1Prop
    _tag = "FO1SAVE"

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> FO1Save:
        """Open a Fallout 1 save file for reading and writing."""
        return super().open(path)

    def write(self) -> None:
        """Write every property held in memory back to the save file."""
        super().write()

    def close(self) -> None:
        """Close the save file. Closing twice does nothing."""
        super().close()

    def is_open(self) -> bool:
        """Tell whether the save file is still open."""
        return super().is_open()

    def get_prop(self, prop: FO1Prop | int) -> str:
        """Return the in-memory value of a property."""
        return super().get_prop(prop)

    def set_prop(self, prop: FO1Prop | int, value: str) -> None:
        """Set the in-memory value of a property, truncated to its field size."""
        super().set_prop(prop, value)

    def read_prop(self, prop: FO1Prop | int) -> str:
        """Read a property straight from the save file."""
        return super().read_prop(prop)

    def write_prop(self, prop: FO1Prop | int, value: str) -> None:
        """Write a property straight to the save file."""
        super().write_prop(prop, value)

    def format_props(self) -> str:
        """Describe the save's properties as text."""
        return super().format_props()

    def format_prop_addresses(self) -> str:
        """Describe the file offsets of the save's properties as text."""
        return super().format_prop_addresses()

    def format(self) -> str:
        """Describe the save's properties and their offsets as text."""
        return super().format()

    def __enter__(self) -> FO1Save:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def is_fo1_save(path: str | os.PathLike[str]) -> bool:
    """Tell whether the file at ``path`` carries the Fallout 1 signature."""
    return _has_signature(path)


def create_fo1_sample_save(path: str | os.PathLike[str] = "fo1.dat") -> Path:
    """Write a small sample Fallout 1 save to ``path`` and return its path."""
    return _write_sample(path, "Save 1")