import pytest

from cadence.scale import RATIOS, modular_scale, resolve_ratio


def test_resolve_named_ratios():
    assert resolve_ratio("golden") == pytest.approx(1.618, abs=1e-3)
    assert resolve_ratio("Minor-Third") == pytest.approx(1.2)
    assert resolve_ratio("perfect_fifth") == pytest.approx(1.5)
    assert resolve_ratio("1.25") == 1.25
    assert resolve_ratio(2) == 2.0
    assert all(ratio > 1 for ratio in RATIOS.values())


@pytest.mark.parametrize("ratio", [1, 0.8, "bogus", None, True])
def test_resolve_ratio_rejects_invalid(ratio):
    with pytest.raises(ValueError):
        resolve_ratio(ratio)


def test_modular_scale_steps():
    assert modular_scale(0, 1.25) == 1.0
    assert modular_scale(2, "octave") == 4.0
    assert modular_scale(-1, 2) == 0.5
    assert modular_scale(1, "major third") == pytest.approx(1.25)


def test_modular_scale_rejects_overflowing_steps():
    with pytest.raises(ValueError, match="out of range"):
        modular_scale(5000, 2)
