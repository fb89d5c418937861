import pytest

from fallsave.fallout3 import FO3Prop, FO3Save, is_fo3_save
from fallsave.fallout3_tools import (
    create_fo3_sample_save,
    format_fo3_prop_addresses,
    format_fo3_props,
    format_fo3_save,
    format_fo3_snapshot,
)

NOT_OPEN = "/!\\ SAVE NOT OPEN /!\\\n"


@pytest.fixture
def sample_path(tmp_path):
    return create_fo3_sample_save(tmp_path / "fo3.fos")


@pytest.fixture
def sample(sample_path):
    with FO3Save.open(sample_path) as save:
        yield save


def test_sample_is_recognised(sample_path):
    assert sample_path.name == "fo3.fos"
    assert is_fo3_save(sample_path) is True


def test_sample_values(sample):
    assert sample.get_prop(FO3Prop.SAVE_SIGNATURE) == "FO3SAVEGAME"
    assert sample.get_prop(FO3Prop.ENGINE_VERSION) == 48
    assert sample.get_prop(FO3Prop.SAVE_NUMBER) == 100
    assert sample.get_prop(FO3Prop.PLAYER_NAME) == "John Fallout"
    assert sample.get_prop(FO3Prop.PLAYER_TITLE) == "Messia"
    assert sample.get_prop(FO3Prop.PLAYER_LEVEL) == 30
    assert sample.get_prop(FO3Prop.PLAYER_LOCATION) == "La Zona contaminata della Capitale"
    assert sample.get_prop(FO3Prop.PLAYER_PLAYTIME) == "090.00.00"
    assert sample.get_prop(FO3Prop.SNAPSHOT_WIDTH) == 512
    assert sample.get_prop(FO3Prop.SNAPSHOT_HEIGHT) == 288
    assert sample.snapshot_length == 442368
    assert sample.snapshot == bytes(442368)


def test_sample_file_ends_with_snapshot(sample_path, sample):
    size = sample_path.stat().st_size
    assert size == sample.addresses[FO3Prop.SNAPSHOT] + sample.snapshot_length


def test_sample_into_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        create_fo3_sample_save(tmp_path / "missing" / "fo3.fos")


def test_format_props(sample, sample_path):
    text = format_fo3_props(sample)
    assert text.startswith("*****************\n* FO3SAVE PROPS *\n*****************\n\n")
    assert "Game Name       : Fallout 3\n" in text
    assert f"Save File Name  : {sample_path}\n" in text
    assert "Player Name     : John Fallout\n" in text
    assert "Player Title    : Messia\n" in text
    assert "Engine Version  : 48\n" in text
    assert "Snapshot Length : 442368\n" in text


def test_format_props_follows_set_prop(sample):
    sample.set_prop(FO3Prop.PLAYER_NAME, "Jane Fallout")
    assert "Player Name     : Jane Fallout\n" in format_fo3_props(sample)


def test_format_prop_addresses(sample):
    text = format_fo3_prop_addresses(sample)
    assert text.startswith("**************************\n* FO3SAVE PROP ADDRESSES *\n")
    assert "Save Signature  : 0000000000000000 0000\n" in text
    lines = [line for line in text.splitlines() if line.count(" : ") == 1]
    assert len(lines) == 12
    assert "Snapshot Height" in lines[-1]


def test_format_save_combines_both_reports(sample):
    text = format_fo3_save(sample)
    assert text == format_fo3_props(sample) + "\n" + format_fo3_prop_addresses(sample)


def test_format_snapshot(sample):
    text = format_fo3_snapshot(sample)
    assert text.startswith("********************\n* FO3SAVE SANPSHOT *\n")
    assert text.count("R : ") == 512 * 288
    assert "R : 000G : 000B : 000  " in text


def test_format_snapshot_shows_set_pixels(sample):
    data = bytearray(sample.snapshot_length)
    data[0:3] = b"\x01\x02\xff"
    sample.set_prop(FO3Prop.SNAPSHOT, bytes(data))
    assert "R : 001G : 002B : 255" in format_fo3_snapshot(sample)


@pytest.mark.parametrize(
    "formatter, title",
    [
        (format_fo3_props, "FO3SAVE PROPS"),
        (format_fo3_prop_addresses, "FO3SAVE PROP ADDRESSES"),
        (format_fo3_save, "FO3SAVE"),
        (format_fo3_snapshot, "FO3SAVE SANPSHOT"),
    ],
)
def test_reports_on_missing_save(formatter, title):
    text = formatter(None)
    assert f"* {title} *" in text
    assert text.endswith(NOT_OPEN)


def test_reports_on_closed_save(sample):
    sample.close()
    assert format_fo3_save(sample).endswith(NOT_OPEN)
    assert format_fo3_props(sample).endswith(NOT_OPEN)
    assert format_fo3_snapshot(sample).endswith(NOT_OPEN)