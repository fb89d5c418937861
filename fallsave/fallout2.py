"""Reading and writing of Fallout 2 save files."""

from __future__ import annotations

import os
from enum import IntEnum
from pathlib import Path

from .fallout1 import (  # noqa: F401  (format constants shared with Fallout 1)
    SIGNATURE,
    SIGNATURE_LENGTH,
    STANDARD_EXT,
    STRING_SIZE,
    _ClassicSave,
    _has_signature,
    _write_sample,
)

GAME_NAME = "Fallout 2"


class FO2Prop(IntEnum):
    """Properties stored in a Fallout 2 save."""

    SAVE_SIGNATURE = 0
    SAVE_NAME = 1
    PLAYER_NAME = 2


class FO2Save(_ClassicSave):
    """An open Fallout 2 save file and the properties read from it."""

    game_name = GAME_NAME
    _prop_type = FO2Prop
    _tag = "FO2SAVE"

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> FO2Save:
        """Open a Fallout 2 save file for reading and writing."""
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

    def get_prop(self, prop: FO2Prop | int) -> str:
        """Return the in-memory value of a property."""
        return super().get_prop(prop)

    def set_prop(self, prop: FO2Prop | int, value: str) -> None:
        """Set the in-memory value of a property, truncated to its field size."""
        super().set_prop(prop, value)

    def read_prop(self, prop: FO2Prop | int) -> str:
        """Read a property straight from the save file."""
        return super().read_prop(prop)

    def write_prop(self, prop: FO2Prop | int, value: str) -> None:
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

    def __enter__(self) -> FO2Save:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def is_fo2_save(path: str | os.PathLike[str]) -> bool:
    """Tell whether the file at ``path`` carries the Fallout 2 signature."""
    return _has_signature(path)


def create_fo2_sample_save(path: str | os.PathLike[str] = "fo2.dat") -> Path:
    """Write a small sample Fallout 2 save to ``path`` and return its path."""
    return _write_sample(path, "Save 2")