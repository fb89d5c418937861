import pytest

from fallsave.codec import SaveFormatError
from fallsave.fallout1 import (
    SIGNATURE,
    SIGNATURE_LENGTH,
    STRING_SIZE,
    FO1Prop,
    FO1Save,
    create_fo1_sample_save,
    is_fo1_save,
)

NOT_OPEN = "/!\\ SAVE NOT OPEN /!\\\n"

EXPECTED = {
    FO1Prop.SAVE_SIGNATURE: (SIGNATURE, 0),
    FO1Prop.PLAYER_NAME: ("John Fallout", 29),
    FO1Prop.SAVE_NAME: ("Save 1", 61),
}


@pytest.fixture
def sample(tmp_path):
    return create_fo1_sample_save(tmp_path / "fo1.dat")


@pytest.fixture
def save(sample):
    with FO1Save.open(sample) as opened:
        yield opened


@pytest.fixture
def closed(sample):
    handle = FO1Save.open(sample)
    handle.close()
    return handle


def test_sample_file_layout(sample):
    data = sample.read_bytes()
    assert data.startswith(SIGNATURE.encode())
    assert len(data) == 93
    assert data[SIGNATURE_LENGTH:SIGNATURE_LENGTH + 12] == bytes(12)


@pytest.mark.parametrize("prop", list(FO1Prop))
def test_sample_values_and_addresses(save, prop):
    value, address = EXPECTED[prop]
    assert save.get_prop(prop) == value
    assert save.read_prop(prop) == value
    assert save.addresses[prop] == address


def test_identity(save, sample):
    assert save.game_name == "Fallout 1"
    assert save.file_name == str(sample)


def test_sample_is_recognised(sample):
    assert is_fo1_save(sample) is True


@pytest.mark.parametrize(
    "content", [None, b"NOT A SAVE FILE AT ALL" + bytes(80), b"FALLOUT"]
)
def test_other_files_not_recognised(tmp_path, content):
    path = tmp_path / "candidate.dat"
    if content is not None:
        path.write_bytes(content)
    assert is_fo1_save(path) is False


@pytest.mark.parametrize(
    "content, error",
    [
        (b"X" * 100, SaveFormatError),
        (SIGNATURE.encode() + bytes(20), SaveFormatError),
        (None, OSError),
    ],
)
def test_open_rejects(tmp_path, content, error):
    path = tmp_path / "broken.dat"
    if content is not None:
        path.write_bytes(content)
    with pytest.raises(error):
        FO1Save.open(path)


def test_set_prop_and_write_round_trip(sample, save):
    new_values = {FO1Prop.PLAYER_NAME: "Vault Dweller", FO1Prop.SAVE_NAME: "Before Necropolis"}
    for prop, value in new_values.items():
        save.set_prop(prop, value)
    save.write()
    save.close()
    with FO1Save.open(sample) as again:
        assert {p: again.get_prop(p) for p in new_values} == new_values
        assert again.get_prop(FO1Prop.SAVE_SIGNATURE) == SIGNATURE


@pytest.mark.parametrize(
    "prop, limit", [(FO1Prop.SAVE_NAME, STRING_SIZE), (FO1Prop.SAVE_SIGNATURE, SIGNATURE_LENGTH)]
)
def test_set_prop_truncates(save, prop, limit):
    save.set_prop(prop, "n" * 50)
    assert save.get_prop(prop) == "n" * limit


def test_props_by_number(save):
    save.set_prop(2, "Max")
    assert save.get_prop(FO1Prop.PLAYER_NAME) == "Max"
    with pytest.raises(ValueError):
        save.get_prop(7)


def test_write_prop_goes_to_file_only(sample, save):
    save.write_prop(FO1Prop.SAVE_NAME, "Quick Save")
    assert save.read_prop(FO1Prop.SAVE_NAME) == "Quick Save"
    assert save.get_prop(FO1Prop.SAVE_NAME) == "Save 1"
    save.close()
    with FO1Save.open(sample) as again:
        assert again.get_prop(FO1Prop.SAVE_NAME) == "Quick Save"


def test_close_is_idempotent(closed):
    closed.close()
    assert closed.is_open() is False


@pytest.mark.parametrize(
    "action",
    [
        lambda s: s.write(),
        lambda s: s.read_prop(FO1Prop.SAVE_NAME),
        lambda s: s.write_prop(FO1Prop.SAVE_NAME, "x"),
    ],
)
def test_closed_file_operations(closed, sample, action):
    with pytest.raises(ValueError, match="closed") as info:
        action(closed)
    assert str(info.value) == "save file is closed"
    assert closed.is_open() is False
    with FO1Save.open(sample) as again:
        assert again.get_prop(FO1Prop.SAVE_NAME) == "Save 1"


def test_context_manager_closes(sample):
    with FO1Save.open(sample) as handle:
        assert handle.is_open() is True
    assert handle.is_open() is False


def test_format_props(save):
    text = save.format_props()
    assert "* FO1SAVE PROPS *" in text
    for line in ("Player Name    : John Fallout", "Save Name      : Save 1", f"Save Signature : {SIGNATURE}"):
        assert line + "\n" in text


def test_format_combines_sections(save):
    addresses = save.format_prop_addresses()
    assert save.format() == save.format_props() + "\n" + addresses
    assert "* FO1SAVE PROP ADDRESSES *" in addresses
    assert addresses.count("\n") == len(addresses.splitlines())


def test_format_when_closed(closed):
    assert closed.format().endswith(NOT_OPEN)
    assert closed.format_props().endswith(NOT_OPEN)
    assert "Player Name" not in closed.format_prop_addresses()