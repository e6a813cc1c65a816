import pytest

from procviz.utils.consts import ConstUtils, looks_like_address, parse_int


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5", 5),
        ("-3", -3),
        ("+7", 7),
        ("12abc", 12),
        ("0x10", 16),
        ("-0X1f", -31),
        ("\u0665", None),
        ("  42", 42),
        ("0", 0),
        ("abc", None),
        ("", None),
        ("x12", None),
    ],
)
def test_parse_int_reads_leading_integer(text, expected):
    assert parse_int(text) == expected


def test_looks_like_address():
    assert looks_like_address("100")
    assert looks_like_address("R1")
    assert not looks_like_address("CP")
    assert not looks_like_address("R\u0665")


def test_increment_instruction_targets_control_pointer():
    assert ConstUtils.INCREMENT_CP_INSTRUCTION == "add CP 1"
    assert ConstUtils.CONTROL_POINTER in ConstUtils.RESERVED_REGISTERS
    assert ConstUtils.ALU_OPCODES == {"add", "sub", "mul", "div"}
