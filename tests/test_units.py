import pytest

from cadence.units import Length, convert_length, format_number, is_unitless, parse_length, to_px


def test_format_number_trims_zeros():
    assert format_number(0.36250) == "0.3625"
    assert format_number(16.0) == "16"
    assert format_number(1 / 3) == "0.33333"
    assert format_number(-0.000001) == "0"


def test_parse_length_units_and_numbers():
    assert parse_length("18px") == Length(18.0, "px")
    assert parse_length(" 1.5rem ") == Length(1.5, "rem")
    assert parse_length(".5em") == Length(0.5, "em")
    assert parse_length("85%") == Length(85.0, "%")
    assert parse_length(12) == Length(12.0, "px")
    assert parse_length(2, default_unit="rem") == Length(2.0, "rem")
    length = Length(3, "em")
    assert parse_length(length) is length


@pytest.mark.parametrize("value", ["abc", "12pt", "", True])
def test_parse_length_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_length(value)


def test_length_rejects_unknown_unit():
    with pytest.raises(ValueError):
        Length(1, "pt")


def test_length_arithmetic_and_formatting():
    assert str(Length(0.3625, "rem")) == "0.3625rem"
    assert 2 * Length(1.5, "rem") == Length(3.0, "rem")
    assert Length(1.5, "rem") * 2 == Length(3.0, "rem")
    assert Length(3, "px") / 2 == Length(1.5, "px")
    assert float(Length(2.5, "em")) == 2.5


def test_length_ordering_requires_same_unit():
    assert Length(1, "rem") < Length(2, "rem")
    assert Length(3, "px") >= Length(2, "px")
    with pytest.raises(TypeError):
        Length(1, "rem") < Length(2, "px")


def test_is_unitless():
    assert is_unitless(1.45)
    assert is_unitless("1.45")
    assert not is_unitless("24px")
    assert not is_unitless(Length(1, "px"))
    assert not is_unitless(True)


def test_convert_length_between_units():
    assert convert_length("24px", "rem", 16) == Length(1.5, "rem")
    assert convert_length("1.5rem", "px", 16) == Length(24.0, "px")
    assert convert_length("18px", "em", 16, context_px=12) == Length(1.5, "em")
    assert convert_length("50%", "px", 16) == Length(8.0, "px")
    assert convert_length("8px", "%", 16) == Length(50.0, "%")
    assert convert_length("2rem", "rem", 16) == Length(2.0, "rem")
    with pytest.raises(ValueError):
        convert_length("1px", "vh", 16)


def test_to_px_uses_context_for_em():
    assert to_px(Length(2, "em"), 16, context_px=10) == 20
    assert to_px(Length(2, "em"), 16) == 32
    assert to_px(Length(2, "rem"), 16, context_px=10) == 32
