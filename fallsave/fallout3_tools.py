"""Text reports and sample files for Fallout 3 saves."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .codec import SEPARATOR, FieldCursor
from .fallout3 import (
    GAME_NAME,
    MAX_SNAPSHOT_HEIGHT,
    MAX_SNAPSHOT_LENGTH,
    MAX_SNAPSHOT_WIDTH,
    SIGNATURE,
    SIGNATURE_LENGTH,
    SNAPSHOT_COLOR_BYTES,
    FO3Prop,
    FO3Save,
)

_NOT_OPEN = "/!\\ SAVE NOT OPEN /!\\\n"

# Properties listed in the address report, in order (the snapshot is left out).
_ADDRESS_LABELS = (
    (FO3Prop.SAVE_SIGNATURE, "Save Signature"),
    (FO3Prop.ENGINE_VERSION, "Engine Version"),
    (FO3Prop.SAVE_NUMBER, "Save Number"),
    (FO3Prop.PLAYER_NAME, "Player Name"),
    (FO3Prop.PLAYER_LEVEL, "Player Level"),
    (FO3Prop.PLAYER_TITLE, "Player Title"),
    (FO3Prop.PLAYER_LOCATION, "Player Location"),
    (FO3Prop.PLAYER_PLAYTIME, "Player Playtime"),
    (FO3Prop.SNAPSHOT_WIDTH, "Snapshot Width"),
    (FO3Prop.SNAPSHOT_HEIGHT, "Snapshot Height"),
)

_SAMPLE_ENGINE_VERSION = 48
_SAMPLE_SAVE_NUMBER = 100
_SAMPLE_PLAYER_NAME = "John Fallout"
_SAMPLE_PLAYER_TITLE = "Messia"
_SAMPLE_PLAYER_LEVEL = 30
_SAMPLE_PLAYER_LOCATION = "La Zona contaminata della Capitale"
_SAMPLE_PLAYER_PLAYTIME = "090.00.00"


def _banner(title: str) -> str:
    line = "*" * (len(title) + 4)
    return f"{line}\n* {title} *\n{line}\n\n"


def _is_usable(save: Optional[FO3Save]) -> bool:
    return save is not None and save.is_open()


def format_fo3_props(save: Optional[FO3Save]) -> str:
    """Describe a Fallout 3 save's properties as text."""
    text = _banner("FO3SAVE PROPS")
    if not _is_usable(save):
        return text + _NOT_OPEN
    get = save.get_prop
    return text + (
        f"Game Name       : {GAME_NAME}\n"
        f"Save File Name  : {save.file_name}\n"
        "\n"
        f"Save Signature  : {get(FO3Prop.SAVE_SIGNATURE)}\n"
        f"Engine Version  : {get(FO3Prop.ENGINE_VERSION)}\n"
        f"Save Number     : {get(FO3Prop.SAVE_NUMBER)}\n"
        f"Player Name     : {get(FO3Prop.PLAYER_NAME)}\n"
        f"Player Level    : {get(FO3Prop.PLAYER_LEVEL)}\n"
        f"Player Title    : {get(FO3Prop.PLAYER_TITLE)}\n"
        f"Player Location : {get(FO3Prop.PLAYER_LOCATION)}\n"
        f"Player Playtime : {get(FO3Prop.PLAYER_PLAYTIME)}\n"
        f"Snapshot Width  : {get(FO3Prop.SNAPSHOT_WIDTH)}\n"
        f"Snapshot Height : {get(FO3Prop.SNAPSHOT_HEIGHT)}\n"
        f"Snapshot Length : {save.snapshot_length}\n"
    )


def format_fo3_prop_addresses(save: Optional[FO3Save]) -> str:
    """Describe the file offsets of a Fallout 3 save's properties as text."""
    text = _banner("FO3SAVE PROP ADDRESSES")
    if not _is_usable(save):
        return text + _NOT_OPEN
    addresses = save.addresses
    lines = [
        f"{'Game Name':<15} : {GAME_NAME}",
        f"{'Save File Name':<15} : {save.file_name}",
        "",
    ]
    lines.extend(
        f"{label:<15} : {addresses[prop]:016d} {addresses[prop]:04X}"
        for prop, label in _ADDRESS_LABELS
    )
    return text + "\n".join(lines) + "\n"


def format_fo3_save(save: Optional[FO3Save]) -> str:
    """Describe a Fallout 3 save's properties and their offsets as text."""
    if not _is_usable(save):
        return _banner("FO3SAVE") + _NOT_OPEN
    return format_fo3_props(save) + "\n" + format_fo3_prop_addresses(save)


def format_fo3_snapshot(save: Optional[FO3Save]) -> str:
    """Describe every pixel of a Fallout 3 save's snapshot as text."""
    text = _banner("FO3SAVE SANPSHOT")
    if not _is_usable(save):
        return text + _NOT_OPEN
    snapshot = save.snapshot
    parts = [text]
    for offset in range(0, save.snapshot_length, SNAPSHOT_COLOR_BYTES):
        red, green, blue = snapshot[offset : offset + SNAPSHOT_COLOR_BYTES]
        parts.append(f"R : {red:03d}G : {green:03d}B : {blue:03d}")
        parts.append("\n" if (offset // 4 + 1) % 5 == 0 else "  ")
    return "".join(parts)


def create_fo3_sample_save(path: str | os.PathLike[str] = "fo3.fos") -> Path:
    """Write a sample Fallout 3 save with a blank snapshot and return its path."""
    path = Path(path)
    with path.open("wb") as stream:
        cursor = FieldCursor(stream)
        cursor.write_fixed_string(SIGNATURE, SIGNATURE_LENGTH)
        cursor.write_bytes(bytes(4))
        cursor.write_uint(_SAMPLE_ENGINE_VERSION)
        cursor.write_bytes(SEPARATOR)
        cursor.write_uint(MAX_SNAPSHOT_WIDTH)
        cursor.write_bytes(SEPARATOR)
        cursor.write_uint(MAX_SNAPSHOT_HEIGHT)
        cursor.write_bytes(SEPARATOR)
        cursor.write_uint(_SAMPLE_SAVE_NUMBER)
        cursor.write_bytes(SEPARATOR)
        cursor.write_string(_SAMPLE_PLAYER_NAME, 0, 1)
        cursor.write_bytes(SEPARATOR)
        cursor.write_string(_SAMPLE_PLAYER_TITLE, 0, 1)
        cursor.write_bytes(SEPARATOR)
        cursor.write_uint(_SAMPLE_PLAYER_LEVEL)
        cursor.write_bytes(SEPARATOR)
        cursor.write_string(_SAMPLE_PLAYER_LOCATION, 0, 1)
        cursor.write_bytes(SEPARATOR)
        cursor.write_string(_SAMPLE_PLAYER_PLAYTIME, 0, 1)
        cursor.write_bytes(SEPARATOR)
        cursor.write_bytes(bytes(MAX_SNAPSHOT_LENGTH))
    return path