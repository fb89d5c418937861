# fallsave

Read and edit the header fields of Fallout save files from Python.

Supported games:

- **Fallout 1** (`.dat`): signature, player name and save name.
- **Fallout 2** (`.dat`): signature, player name and save name.
- **Fallout 3** (`.fos`): signature, engine version, save number, player name,
  level, title, location and play time, snapshot width and height, and the
  RGB snapshot.

The package has no dependencies outside the standard library.

## Installation

```
pip install fallsave
```

## Fallout 1 and Fallout 2

```python
from fallsave.fallout1 import FO1Prop, FO1Save, is_fo1_save

if is_fo1_save("SAVE.DAT"):
    with FO1Save.open("SAVE.DAT") as save:
        print(save.get_prop(FO1Prop.PLAYER_NAME))
        save.set_prop(FO1Prop.SAVE_NAME, "Before the Vault")
        save.write()
```

`FO1Save.open(path)` opens the file for reading and writing and loads its
properties. `get_prop` and `set_prop` work on the values held in memory
(`set_prop` truncates a value to the size of its field), and `write` puts them
all back into the file. `read_prop` and `write_prop` go straight to the file
at the offset where each property was found. `addresses` gives those offsets,
`file_name` the path that was opened, and `close`, `is_open` and the `with`
statement manage the open file.

`fallsave.fallout2` has the same shape: `FO2Save`, `FO2Prop`, `is_fo2_save`.
Both games use the same signature, so `is_fo1_save` and `is_fo2_save` give the
same answer for any file; they cannot tell the two games apart.

## Fallout 3

```python
from fallsave.fallout3 import FO3Prop, FO3Save, is_fo3_save

if is_fo3_save("Save 1.fos"):
    with FO3Save.open("Save 1.fos") as save:
        print(save.get_prop(FO3Prop.PLAYER_LEVEL))
        save.set_prop(FO3Prop.PLAYER_NAME, "Lone Wanderer")
        save.write()
```

`FO3Save` offers the same methods as the Fallout 1 class. Property values are
`str` for the signature and text fields, `int` for the numeric fields and
`bytes` for `FO3Prop.SNAPSHOT`. `set_prop` and `write_prop` check values:
numbers must fit in an unsigned 32-bit field, and a new snapshot must have
exactly `snapshot_length` bytes. `snapshot` returns the snapshot held in
memory.

`write` rewrites the whole header and snapshot and keeps whatever follows the
snapshot, so text fields may change length. `write_prop` on a text field
writes in place: a value of a different length does not move the data after
it, so prefer `set_prop` followed by `write` for text.

## Text reports

`FO1Save.format()` and `FO2Save.format()` return a report of a save's
properties and the file offsets where they are stored; `format_props()` and
`format_prop_addresses()` return each half. For Fallout 3,
`fallsave.fallout3_tools` provides `format_fo3_props`,
`format_fo3_prop_addresses`, `format_fo3_save` and `format_fo3_snapshot`
(one entry per pixel). All of them return strings; print them yourself.

```python
from fallsave.fallout3_tools import format_fo3_save

with FO3Save.open("Save 1.fos") as save:
    print(format_fo3_save(save))
```

## Sample saves

For experiments and tests, `create_fo1_sample_save(path)`,
`create_fo2_sample_save(path)` and `create_fo3_sample_save(path)` write a
minimal save of each kind and return its path. They default to `fo1.dat`,
`fo2.dat` and `fo3.fos` in the current directory.

## Low-level access

`fallsave.codec.FieldCursor` reads and writes the field types used by the save
formats (NUL-padded fixed strings, little-endian 32-bit unsigned integers,
length-prefixed strings and raw bytes) from a moving position in a binary
stream.

## Errors

`open` raises `OSError` when the file cannot be opened and
`fallsave.codec.SaveFormatError` when it is too short or is not a save of that
game. Out-of-range values raise `ValueError`, as does using a save after it has
been closed. The `is_*_save` functions never raise; they return `False`.

## Version

```python
from fallsave.version import friendly_version, min_friendly_version, is_compatible

friendly_version()         # "2.1.0"
min_friendly_version()     # "2.0.0"
is_compatible(2, 0, 0)     # True
is_compatible(3, 0, 0)     # False
```

## What it does not do

- It reads only the header fields listed above, not inventories, quests or
  the rest of the game state.
- It handles Fallout 1, Fallout 2 and Fallout 3 saves only.
- It has no command-line tool; it is a library to call from Python.

Writing changes the save file in place. Keep a copy of any save you care about.